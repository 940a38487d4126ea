"""Phrase templates, synonym pools and static copy used by the generators.

Everything here is immutable catalog data. Lookups take exact keys and raise
``CatalogError`` for anything unknown; callers only pass keys that exist in
this module, so a miss is an authoring bug rather than bad user input.
"""
from __future__ import annotations

import copy
from typing import Any

from creator_toolkit.errors import CatalogError

TITLE_STYLES: tuple[str, ...] = ("curiosity", "howTo", "list", "challenge", "comparison")

_TEMPLATES: dict[str, dict[str, tuple[str, ...]]] = {
    "title-hook": {
        "curiosity": (
            "What Happens When You {action} {topic}?",
            "The Truth About {topic} Nobody Tells You",
            "Why {topic} Changed Everything I Knew About {niche}",
            "I Discovered Something Shocking About {topic}",
            "{topic}: The Secret {niche} Experts Don't Share",
        ),
        "howTo": (
            "How to {action} {topic} (Step-by-Step Guide)",
            "The Ultimate Guide to {action} {topic}",
            "Master {topic} in {time} - Complete Tutorial",
            "How I {action} {topic} (And How You Can Too)",
            "{action} {topic} Like a Pro - Beginner to Expert",
        ),
        "list": (
            "{number} {topic} Tips That Will Change Your {niche}",
            "Top {number} Mistakes When {action} {topic}",
            "{number} Things I Wish I Knew Before {action} {topic}",
            "{number} {topic} Hacks That Actually Work",
            "The {number} Best {topic} Strategies for {year}",
        ),
        "challenge": (
            "I Tried {topic} for {time} - Here's What Happened",
            "{time} {topic} Challenge: My Honest Results",
            "Can You Really {action} {topic} in {time}?",
            "Testing {topic} for {time}: Worth It?",
            "I Spent {time} Mastering {topic} - The Results",
        ),
        "comparison": (
            "{topic} vs {alternative}: Which is Better?",
            "Why I Switched from {alternative} to {topic}",
            "{topic} vs {alternative}: The Ultimate Comparison",
            "I Tested {topic} and {alternative} - Clear Winner",
            "The Real Difference Between {topic} and {alternative}",
        ),
        "hooks": (
            "Stop everything you're doing because {hook_reason}...",
            "In the next {time}, I'm going to show you exactly how to {promise}...",
            "If you've ever struggled with {pain_point}, this video is for you...",
            "Here's something that took me {time} to figure out about {topic}...",
            "Most people get this completely wrong about {topic}, and here's why...",
            "What if I told you that {contrarian_statement}?",
            "I'm about to share the exact {method} I used to {result}...",
            "By the end of this video, you'll know exactly how to {promise}...",
            "This single {thing} changed everything about how I approach {topic}...",
            "The biggest mistake I see with {topic} is {mistake}, and here's the fix...",
        ),
    },
    "thumbnail-brief": {
        "textOptions": (
            "{topic_upper}",
            "The {topic} Secret",
            "{topic} 101",
            "I Tried {topic}",
            "{topic}?!",
        ),
        "objectFocus": ("Clean shot of key {topic}-related object or symbol",),
    },
    "seo-toolkit": {
        "tagSuffixes": (
            "{topic} tutorial",
            "{topic} for beginners",
            "how to {topic}",
            "{topic} tips",
            "{topic} guide",
            "{topic} {year}",
            "learn {topic}",
            "{topic} explained",
            "best {topic}",
            "{topic} review",
        ),
        "description": (
            "In this video, I'm diving deep into {topic}. Whether you're a beginner or looking to level up "
            "your skills, this comprehensive guide covers everything you need to know.\n"
            "\n"
            "\U0001f525 What you'll learn:\n"
            "{learn_list}\n"
            "\n"
            "⏰ Timestamps:\n"
            "{timestamps}\n"
            "\n"
            "\U0001f4cc Resources mentioned:\n"
            "[Add your links here]\n"
            "\n"
            "\U0001f514 Don't forget to subscribe and hit the bell for more {topic} content!\n"
            "\n"
            "{hashtags}",
        ),
        "pinnedComment": (
            "Thanks for watching! \U0001f64f Quick question for you: What's your biggest challenge with {topic}? "
            "Drop it in the comments and I'll try to help!\n"
            "\n"
            "\U0001f4cc Key takeaways from this video:\n"
            "1. [First main point]\n"
            "2. [Second main point]\n"
            "3. [Third main point]\n"
            "\n"
            "\U0001f449 Want more {topic} content? Let me know what you'd like to see next!",
        ),
        "defaultTitle": ("{topic} - Complete Guide",),
        "whatIs": ("What is {topic}?",),
    },
}

_SYNONYMS: dict[str, tuple[str, ...]] = {
    "action": ("master", "learn", "understand", "improve", "optimize", "transform", "level up", "dominate", "crush"),
    "time": ("30 days", "7 days", "24 hours", "one week", "one month", "100 days"),
    "number": ("5", "7", "10", "3", "12", "15", "8"),
    "year": ("2026", "this year"),
}

_CATEGORY_TIPS = {
    "curiosity": "Great for driving clicks with intrigue",
    "howTo": "Perfect for tutorial content, ranks well in search",
    "list": "High CTR format, easy to consume",
    "challenge": "Builds anticipation and storytelling",
    "comparison": "Captures search intent for buyers",
}

HOOK_TYPES: tuple[str, ...] = ("Pattern Interrupt", "Promise", "Empathy", "Authority", "Curiosity")
HOOK_BEST_FOR: tuple[str, ...] = (
    "Grabbing attention fast",
    "Educational content",
    "Relatable content",
    "Tutorial/guide videos",
    "Controversial takes",
)


def _item(task: str, details: str, critical: bool, **kw: Any) -> dict:
    return {"task": task, "details": details, "critical": critical, "checked": False, **kw}


_STATIC: dict[str, dict[str, Any]] = {
    "thumbnail-brief": {
        "textStyles": (
            ("Bold Impact", "Center or Right Third"),
            ("Mystery/Intrigue", "Top Third"),
            ("Educational", "Bottom Third"),
            ("Personal Story", "Center"),
            ("Curiosity/Shock", "Large, Center"),
        ),
        "visualConcepts": [
            {
                "concept": "Before/After Split",
                "description": "Show transformation or comparison visually",
                "elements": ["Split screen effect", "Contrasting colors", "Clear visual difference"],
                "bestFor": "Tutorial, transformation, or comparison content",
            },
            {
                "concept": "Face + Emotion",
                "description": "Your face with strong emotion related to content",
                "elements": ["High contrast lighting", "Expressive face", "Minimal background"],
                "bestFor": "Personal stories, reactions, vlogs",
            },
            {
                "concept": "Object Focus",
                "description": None,  # filled from the objectFocus template
                "elements": ["Shallow depth of field", "Dramatic lighting", "Bold text overlay"],
                "bestFor": "Product reviews, how-to content",
            },
            {
                "concept": "Text-Dominant",
                "description": "Large, readable text as the main element",
                "elements": ["High contrast text", "Simple background", "Maybe small supporting image"],
                "bestFor": "Educational content, lists, news",
            },
        ],
        "colorMoods": [
            {"mood": "High Energy", "colors": ["Red", "Orange", "Yellow"], "effect": "Excitement, urgency, attention"},
            {"mood": "Trust & Calm", "colors": ["Blue", "Green", "White"], "effect": "Credibility, relaxation, clarity"},
            {"mood": "Premium", "colors": ["Black", "Gold", "Deep Purple"], "effect": "Luxury, exclusivity, authority"},
            {"mood": "Fresh & Fun", "colors": ["Teal", "Pink", "Bright Green"], "effect": "Youth, creativity, energy"},
        ],
        "compositionTips": [
            "Follow the rule of thirds - place key elements on intersection points",
            "Leave space for YouTube's timestamp overlay (bottom right corner)",
            "Ensure text is readable at small sizes (mobile viewing)",
            "Use 3 or fewer colors for maximum impact",
            "Face looking towards the text guides viewer's eye",
            "High contrast between text and background is essential",
        ],
        "technicalSpecs": {
            "dimensions": "1280 x 720 pixels",
            "aspectRatio": "16:9",
            "format": "JPG or PNG",
            "maxSize": "2MB",
            "safeZone": "Keep key elements away from edges (10% margin)",
        },
    },
    "seo-toolkit": {
        "descriptionTips": [
            "First 200 characters are most important - include main keyword",
            "Add timestamps (chapters) for better user experience and SEO",
            "Include relevant hashtags (3-5 max)",
            "Add links to resources, social media, related videos",
        ],
        "tagTips": [
            "Use a mix of broad and specific tags",
            "Include your brand/channel name",
            "Add trending related terms",
            "Don't exceed 500 characters total",
        ],
        "pinnedCommentTips": [
            "Pin a comment to boost engagement",
            "Ask a question to encourage responses",
            "Summarize key points for value",
            "Include a soft CTA",
        ],
        "titleTips": [
            "Keep under 60 characters for full visibility",
            "Front-load main keyword",
            "Include power words (Ultimate, Complete, Easy)",
            "Add year for evergreen content",
        ],
        # (percent of video length, title, tip); None title means the whatIs template
        "chapterPlan": (
            (0, "Introduction", "Must start at 0:00"),
            (8, None, "Define the topic early"),
            (20, "Getting Started", "Beginner-friendly section"),
            (40, "Core Concepts", "Main content delivery"),
            (60, "Pro Tips & Tricks", "Advanced value"),
            (80, "Common Mistakes", "Helps with retention"),
            (90, "Summary & Next Steps", "Strong close"),
        ),
        "descriptionTimestamps": (
            (0, "Introduction"),
            (10, "Getting Started"),
            (30, "Deep Dive"),
            (60, "Advanced Tips"),
            (90, "Wrap Up"),
        ),
    },
    "script-outline": {
        "introElements": [
            ("Hook", "Open with a compelling hook about {topic}", "First 3 seconds are crucial - make them count"),
            ("Credibility", "Briefly establish why you can speak on this topic", "Keep it short - 1-2 sentences max"),
            ("Promise", "Tell viewers exactly what they'll learn about {topic}", "Be specific about the value they'll get"),
            ("Preview", "Quick overview of what's coming", "Creates anticipation and reduces drop-off"),
        ],
        "sectionElements": [
            ("Transition", "{transition}", "Smooth transitions keep viewers engaged"),
            ("Main Content", "Deep dive into: {point}", "Use examples, stories, or demonstrations"),
            ("Key Insight", "Share your unique perspective on {point}", "This is where you add unique value"),
            ("Mini CTA", "Engagement prompt (comment, like)", "Mid-roll engagement boosts algorithm favor"),
        ],
        "ctaElements": [
            ("Recap", "Quick summary of key takeaways", "Reinforces value delivered"),
            ("Action", "{call_to_action}", "Be specific about what you want them to do"),
            ("Next Video", "Tease related content to watch next", "Increases watch time and session duration"),
        ],
        "defaultPoints": ("Main Point 1", "Main Point 2", "Main Point 3"),
        "defaultCallToAction": "Subscribe for more content like this",
    },
    "upload-checklist": {
        "prePublish": [
            _item("Video exported in correct format", "1080p or 4K, H.264 codec recommended", True),
            _item("Audio levels checked", "-14 to -10 dB average, no clipping", True),
            _item("Captions/subtitles added", "Auto-captions reviewed and corrected", False),
            _item("Thumbnail created and optimized", "1280x720, under 2MB, readable at small size", True),
            _item("Title finalized", "Under 60 chars, keyword at front", True),
            _item("Description written", "Keywords, timestamps, links included", True),
            _item("Tags added", "8-15 relevant tags, mix of broad and specific", False),
            _item("End screen elements added", "Subscribe button, next video, playlist", False),
            _item("Cards added at key moments", "Link to related content, playlists", False),
            _item("Category selected", "Choose most relevant category", False),
            _item("Playlist assignment", "Add to relevant playlist(s)", False),
        ],
        "publishDay": [
            _item("Double-check scheduled time", "Optimal: Tue-Thu, 2-4 PM audience time", True),
            _item("Notify your community", "Community post, Stories, other platforms", False),
            _item("Prepare pinned comment", "Ready to post immediately after publish", False),
            _item("Social media posts ready", "Twitter, Instagram, etc. with video link", False),
            _item("Email list notification", "If applicable, draft email ready", False),
            _item("Respond to early comments", "First hour engagement is crucial", True),
        ],
        "postPublish": [
            _item("Monitor first 24 hours", "Check CTR, watch time, comments", True, timing="First 24 hours"),
            _item("Respond to all comments", "Build community, boost engagement", True, timing="First 48 hours"),
            _item("Share to relevant communities", "Reddit, Discord, Facebook groups (follow rules)", False, timing="First week"),
            _item("Analyze performance", "Compare to previous videos, note learnings", False, timing="After 7 days"),
            _item("Update description if needed", "Add corrections, new links", False, timing="Ongoing"),
            _item("Plan follow-up content", "Based on comments and performance", False, timing="After 7 days"),
        ],
        "bestPractices": [
            "Upload 24+ hours before scheduled publish for processing",
            "Best days: Tuesday, Wednesday, Thursday",
            "Best times: 2-4 PM in your audience's timezone",
            "First 48 hours determine video's long-term performance",
            "Consistency matters more than perfect timing",
        ],
    },
}


def templates_for(tool: str, category: str) -> tuple[str, ...]:
    try:
        return _TEMPLATES[tool][category]
    except KeyError:
        raise CatalogError(f"no templates for {tool}/{category}") from None


def synonyms_for(placeholder: str) -> tuple[str, ...]:
    try:
        return _SYNONYMS[placeholder]
    except KeyError:
        raise CatalogError(f"no synonym pool for {{{placeholder}}}") from None


def has_synonyms(placeholder: str) -> bool:
    return placeholder in _SYNONYMS


def category_tip(category: str) -> str:
    try:
        return _CATEGORY_TIPS[category]
    except KeyError:
        raise CatalogError(f"no tip for title style {category}") from None


def static_content(tool: str, key: str) -> Any:
    """Return a private copy of a static catalog entry, safe for callers to mutate."""
    try:
        return copy.deepcopy(_STATIC[tool][key])
    except KeyError:
        raise CatalogError(f"no static content for {tool}/{key}") from None
