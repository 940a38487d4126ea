"""Template-based content generators, one per tool.

Each generator takes the validated input mapping and a random source and
returns a JSON-serialisable dict. The only randomness is synonym selection in
``fill_template``; pass a seeded ``random.Random`` for reproducible output.
"""
from __future__ import annotations

import random
import re
from typing import Any, Mapping

from creator_toolkit.templates import (
    HOOK_BEST_FOR,
    HOOK_TYPES,
    TITLE_STYLES,
    category_tip,
    static_content,
    synonyms_for,
    templates_for,
)

TITLE_COUNT = 10
HOOK_COUNT = 5

DEFAULT_MINUTES = 10
INTRO_MAX_SECONDS = 60
CTA_SECONDS = 30

MAX_TAGS = 15

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_WS = re.compile(r"\s+")
_TRUTHY = ("yes", "y", "true", "1", "on")


def fill_template(template: str, data: Mapping[str, Any], rng: random.Random) -> str:
    """Substitute ``{name}`` tokens in one pass.

    Supplied values win; anything else is drawn once from its synonym pool and
    reused for every occurrence in this template. A token with neither source
    raises ``CatalogError``.
    """
    picks: dict[str, str] = {}

    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if data.get(name) is not None:
            return str(data[name])
        if name not in picks:
            picks[name] = rng.choice(synonyms_for(name))
        return picks[name]

    return _PLACEHOLDER.sub(_sub, template)


def _text(data: Mapping[str, Any], key: str, default: str = "") -> str:
    v = data.get(key)
    if v is None:
        return default
    s = str(v).strip()
    return s or default


def split_list(raw: Any) -> list[str]:
    if raw is None:
        return []
    return [p.strip() for p in str(raw).split(",") if p.strip()]


def parse_minutes(raw: Any, default: int = DEFAULT_MINUTES) -> int:
    """Whole minutes from user input; zero, negative or non-numeric gives ``default``."""
    try:
        minutes = int(float(str(raw).strip()))
    except (TypeError, ValueError, OverflowError):
        return default
    return minutes if minutes > 0 else default


def parse_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in _TRUTHY


def format_timestamp(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_duration(seconds: int) -> str:
    mins, secs = divmod(seconds, 60)
    if not mins:
        return f"{secs} sec"
    if not secs:
        return f"{mins} min"
    return f"{mins} min {secs} sec"


def _elements(rows: list[tuple[str, str, str]], data: Mapping[str, Any], rng: random.Random) -> list[dict]:
    return [{"type": t, "content": fill_template(c, data, rng), "tips": tip} for t, c, tip in rows]


# ---------- Title & Hook ----------

def generate_title_hook(data: Mapping[str, Any], rng: random.Random) -> dict:
    topic = _text(data, "topic", "this topic")
    niche = _text(data, "niche")
    values = {
        "topic": topic,
        "niche": niche or "your field",
        "alternative": niche or "alternatives",
        "hook_reason": f"this will change how you think about {topic}",
        "promise": f"master {topic} faster than you thought possible",
        "pain_point": topic,
        "contrarian_statement": f"everything you know about {topic} is wrong",
        "method": "strategy",
        "result": f"achieve amazing results with {topic}",
        "thing": "insight",
        "mistake": "not understanding the fundamentals",
    }

    titles = []
    for i in range(TITLE_COUNT):
        style = TITLE_STYLES[i % len(TITLE_STYLES)]
        template = templates_for("title-hook", style)[i // len(TITLE_STYLES)]
        titles.append({"title": fill_template(template, values, rng), "style": style, "tip": category_tip(style)})

    hook_templates = templates_for("title-hook", "hooks")
    hooks = [
        {"hook": fill_template(hook_templates[i], values, rng), "type": HOOK_TYPES[i], "bestFor": HOOK_BEST_FOR[i]}
        for i in range(HOOK_COUNT)
    ]
    return {"titles": titles, "hooks": hooks}


# ---------- Script Outline ----------

def generate_script_outline(data: Mapping[str, Any], rng: random.Random) -> dict:
    topic = _text(data, "topic", "this topic")
    minutes = parse_minutes(data.get("videoLength"))
    points = split_list(data.get("keyPoints")) or list(static_content("script-outline", "defaultPoints"))
    call_to_action = _text(data, "callToAction", static_content("script-outline", "defaultCallToAction"))

    total = minutes * 60
    intro_len = min(INTRO_MAX_SECONDS, total // 10)
    section_len = (total - intro_len - CTA_SECONDS) // len(points)
    cta_start = total - CTA_SECONDS

    intro = {
        "timestamp": format_timestamp(0),
        "duration": format_duration(intro_len),
        "durationSeconds": intro_len,
        "elements": _elements(static_content("script-outline", "introElements"), {"topic": topic}, rng),
    }

    section_rows = static_content("script-outline", "sectionElements")
    sections = []
    current = intro_len
    for idx, point in enumerate(points):
        transition = "Dive into the first point" if idx == 0 else f"Transition from {points[idx - 1]}"
        sections.append({
            "number": idx + 1,
            "title": point,
            "timestamp": format_timestamp(current),
            "duration": format_duration(section_len),
            "durationSeconds": section_len,
            "elements": _elements(section_rows, {"point": point, "transition": transition}, rng),
        })
        current += section_len

    cta = {
        "timestamp": format_timestamp(cta_start),
        "duration": format_duration(CTA_SECONDS),
        "durationSeconds": CTA_SECONDS,
        "elements": _elements(static_content("script-outline", "ctaElements"), {"call_to_action": call_to_action}, rng),
    }

    chapters = [{"time": intro["timestamp"], "title": "Introduction"}]
    chapters += [{"time": s["timestamp"], "title": s["title"]} for s in sections]
    chapters.append({"time": cta["timestamp"], "title": "Wrap Up & Next Steps"})

    return {
        "intro": intro,
        "sections": sections,
        "cta": cta,
        "chapters": chapters,
        "metadata": {
            "totalLength": f"{minutes} minutes",
            "totalSeconds": total,
            "sectionCount": len(points),
        },
    }


# ---------- Thumbnail Brief ----------

def generate_thumbnail_brief(data: Mapping[str, Any], rng: random.Random) -> dict:
    topic = _text(data, "topic", "this topic")
    values = {"topic": topic, "topic_upper": topic.upper()}

    texts = templates_for("thumbnail-brief", "textOptions")
    styles = static_content("thumbnail-brief", "textStyles")
    text_options = [
        {"text": fill_template(t, values, rng), "style": style, "placement": placement}
        for t, (style, placement) in zip(texts, styles)
    ]

    concepts = static_content("thumbnail-brief", "visualConcepts")
    for c in concepts:
        if c["description"] is None:
            c["description"] = fill_template(templates_for("thumbnail-brief", "objectFocus")[0], values, rng)

    return {
        "textOptions": text_options,
        "visualConcepts": concepts,
        "colorMoods": static_content("thumbnail-brief", "colorMoods"),
        "compositionTips": static_content("thumbnail-brief", "compositionTips"),
        "technicalSpecs": static_content("thumbnail-brief", "technicalSpecs"),
    }


# ---------- SEO Toolkit ----------

def _minute_mark(minutes: int, percent: int) -> str:
    return f"{minutes * percent // 100}:00"


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out = []
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def generate_seo_toolkit(data: Mapping[str, Any], rng: random.Random) -> dict:
    topic = _text(data, "topic", "this topic")
    keywords = split_list(data.get("targetKeywords")) or [topic]
    minutes = parse_minutes(data.get("videoLength"))

    timestamps = "\n".join(
        f"{_minute_mark(minutes, pct)} - {title}"
        for pct, title in static_content("seo-toolkit", "descriptionTimestamps")
    )
    hashtags = f"#{_WS.sub('', topic)} #{_WS.sub('', keywords[0]) or 'YouTube'}"
    description = fill_template(
        templates_for("seo-toolkit", "description")[0],
        {
            "topic": topic,
            "learn_list": "\n".join(f"• {k}" for k in keywords),
            "timestamps": timestamps,
            "hashtags": hashtags,
        },
        rng,
    )

    suffixed = [fill_template(t, {"topic": topic}, rng) for t in templates_for("seo-toolkit", "tagSuffixes")]
    tags = _dedupe([topic, *keywords, *suffixed])[:MAX_TAGS]

    what_is = fill_template(templates_for("seo-toolkit", "whatIs")[0], {"topic": topic}, rng)
    chapters = [
        {"time": _minute_mark(minutes, pct), "title": title or what_is, "tip": tip}
        for pct, title, tip in static_content("seo-toolkit", "chapterPlan")
    ]

    pinned = fill_template(templates_for("seo-toolkit", "pinnedComment")[0], {"topic": topic}, rng)
    current_title = _text(data, "videoTitle") or fill_template(
        templates_for("seo-toolkit", "defaultTitle")[0], {"topic": topic}, rng
    )

    return {
        "keywords": keywords,
        "description": {"full": description, "tips": static_content("seo-toolkit", "descriptionTips")},
        "tags": {"list": tags, "tips": static_content("seo-toolkit", "tagTips")},
        "chapters": chapters,
        "pinnedComment": {"text": pinned, "tips": static_content("seo-toolkit", "pinnedCommentTips")},
        "titleOptimization": {"current": current_title, "tips": static_content("seo-toolkit", "titleTips")},
    }


# ---------- Upload Checklist ----------

def generate_upload_checklist(data: Mapping[str, Any], rng: random.Random) -> dict:
    return {
        "prePublish": static_content("upload-checklist", "prePublish"),
        "publishDay": static_content("upload-checklist", "publishDay"),
        "postPublish": static_content("upload-checklist", "postPublish"),
        "bestPractices": static_content("upload-checklist", "bestPractices"),
        "videoDetails": {
            "topic": _text(data, "topic"),
            "scheduledDate": _text(data, "scheduledDate", "Not scheduled"),
            "isPartOfSeries": parse_flag(data.get("isPartOfSeries")),
        },
    }
