from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from creator_toolkit.errors import ToolNotFound, ValidationFailed
from creator_toolkit.generators import (
    generate_script_outline,
    generate_seo_toolkit,
    generate_thumbnail_brief,
    generate_title_hook,
    generate_upload_checklist,
)

Generator = Callable[[Mapping[str, Any], random.Random], dict]


@dataclass(frozen=True)
class ToolField:
    name: str
    label: str
    type: str = "text"  # text/number/textarea/select
    required: bool = False
    placeholder: str | None = None
    options: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"name": self.name, "label": self.label, "type": self.type, "required": self.required}
        if self.placeholder:
            d["placeholder"] = self.placeholder
        if self.options:
            d["options"] = list(self.options)
        return d


@dataclass(frozen=True)
class ToolDefinition:
    slug: str
    name: str
    description: str
    icon: str
    fields: tuple[ToolField, ...] = ()
    generator: Generator | None = field(default=None, compare=False)
    coming_soon: bool = False

    @property
    def runnable(self) -> bool:
        return self.generator is not None and not self.coming_soon

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "comingSoon": self.coming_soon,
            "fields": [f.to_dict() for f in self.fields],
        }


def _missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def validate_input(tool: ToolDefinition, data: Mapping[str, Any]) -> None:
    """Fail on the first required field that is absent or blank, in schema order."""
    for f in tool.fields:
        if f.required and _missing(data.get(f.name)):
            raise ValidationFailed(f"{f.label} is required", {"field": f.name})


TOOLS: dict[str, ToolDefinition] = {
    t.slug: t
    for t in (
        ToolDefinition(
            slug="title-hook",
            name="Title & Hook Generator",
            description="Generate compelling video titles and opening hooks that grab attention",
            icon="Sparkles",
            fields=(
                ToolField("topic", "Video Topic", required=True, placeholder='e.g., "Video editing for beginners"'),
                ToolField("niche", "Your Niche", placeholder='e.g., "Tech tutorials"'),
                ToolField("targetAudience", "Target Audience", placeholder='e.g., "Beginner content creators"'),
                ToolField("videoStyle", "Video Style", type="select", options=("Tutorial", "Vlog", "Review", "Story", "List")),
            ),
            generator=generate_title_hook,
        ),
        ToolDefinition(
            slug="script-outline",
            name="Script Outline Builder",
            description="Create structured video scripts with timestamps and sections",
            icon="FileText",
            fields=(
                ToolField("topic", "Video Topic", required=True, placeholder='e.g., "How to grow on YouTube"'),
                ToolField("videoLength", "Video Length (minutes)", type="number", required=True, placeholder="10"),
                ToolField("keyPoints", "Key Points (comma-separated)", type="textarea", placeholder="Point 1, Point 2, Point 3"),
                ToolField("targetAudience", "Target Audience", placeholder='e.g., "New YouTubers"'),
                ToolField("callToAction", "Call to Action", placeholder='e.g., "Subscribe for weekly tips"'),
            ),
            generator=generate_script_outline,
        ),
        ToolDefinition(
            slug="thumbnail-brief",
            name="Thumbnail Brief Creator",
            description="Generate thumbnail concepts with text, visuals, and composition tips",
            icon="Image",
            fields=(
                ToolField("topic", "Video Topic", required=True, placeholder='e.g., "iPhone vs Android"'),
                ToolField("emotion", "Desired Emotion", type="select", options=("Curiosity", "Excitement", "Shock", "Trust", "Fun")),
                ToolField("targetAudience", "Target Audience", placeholder='e.g., "Tech enthusiasts"'),
                ToolField("competitorStyle", "Competitor Reference", placeholder='e.g., "MKBHD style"'),
            ),
            generator=generate_thumbnail_brief,
        ),
        ToolDefinition(
            slug="seo-toolkit",
            name="SEO Toolkit",
            description="Generate optimized descriptions, tags, chapters, and pinned comments",
            icon="Search",
            fields=(
                ToolField("topic", "Video Topic", required=True, placeholder='e.g., "React tutorial"'),
                ToolField("videoTitle", "Video Title", placeholder="Your planned title"),
                ToolField("targetKeywords", "Target Keywords (comma-separated)", type="textarea", placeholder="react, javascript, web development"),
                ToolField("videoLength", "Video Length (minutes)", type="number", placeholder="15"),
            ),
            generator=generate_seo_toolkit,
        ),
        ToolDefinition(
            slug="upload-checklist",
            name="Upload Checklist",
            description="Complete pre-publish, publish day, and post-publish checklists",
            icon="CheckSquare",
            fields=(
                ToolField("topic", "Video Topic", required=True, placeholder='e.g., "My new video"'),
                ToolField("scheduledDate", "Scheduled Date", placeholder='e.g., "June 15, 2025"'),
                ToolField("isPartOfSeries", "Part of a Series?", type="select", options=("Yes", "No")),
            ),
            generator=generate_upload_checklist,
        ),
        ToolDefinition(
            slug="analytics-tracker",
            name="Analytics Tracker",
            description="Track and analyze your video performance metrics",
            icon="BarChart3",
            coming_soon=True,
        ),
    )
}


def get_tool(slug: str) -> ToolDefinition:
    tool = TOOLS.get(slug)
    if tool is None:
        raise ToolNotFound(detail={"tool": slug})
    return tool


def get_runnable_tool(slug: str) -> ToolDefinition:
    tool = get_tool(slug)
    if not tool.runnable:
        raise ToolNotFound(detail={"tool": slug})
    return tool


def run_tool(tool: ToolDefinition, data: Mapping[str, Any], rng: random.Random) -> dict:
    if tool.generator is None:
        raise ToolNotFound(detail={"tool": tool.slug})
    return tool.generator(data, rng)
