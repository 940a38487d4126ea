"""Tests for the tool registry, input validation and template catalog."""

import random

import pytest

from creator_toolkit.errors import CatalogError, ToolNotFound, ValidationFailed
from creator_toolkit.templates import category_tip, has_synonyms, static_content, synonyms_for, templates_for
from creator_toolkit.tools import TOOLS, get_runnable_tool, get_tool, run_tool, validate_input

RUNNABLE = ["title-hook", "script-outline", "thumbnail-brief", "seo-toolkit", "upload-checklist"]


class TestRegistry:
    """Test tool lookup."""

    def test_runnable_tools(self):
        assert [slug for slug, t in TOOLS.items() if t.runnable] == RUNNABLE

    def test_coming_soon_is_listed_but_not_runnable(self):
        tool = get_tool("analytics-tracker")
        assert tool.to_dict()["comingSoon"] is True
        with pytest.raises(ToolNotFound):
            get_runnable_tool("analytics-tracker")

    def test_unknown_slug(self):
        with pytest.raises(ToolNotFound) as exc_info:
            get_tool("viral-predictor")
        assert exc_info.value.detail == {"tool": "viral-predictor"}

    def test_schema_shape(self):
        d = get_tool("script-outline").to_dict()
        required = [f["name"] for f in d["fields"] if f["required"]]
        assert required == ["topic", "videoLength"]


class TestValidateInput:
    """Test required-field checks."""

    @pytest.mark.parametrize("data", [{}, {"topic": None}, {"topic": ""}, {"topic": "   "}])
    def test_missing_topic(self, data):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_input(get_tool("title-hook"), data)
        assert exc_info.value.message == "Video Topic is required"
        assert exc_info.value.detail == {"field": "topic"}

    def test_first_missing_field_in_schema_order(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_input(get_tool("script-outline"), {"topic": "x"})
        assert exc_info.value.message == "Video Length (minutes) is required"

    def test_zero_is_present(self):
        validate_input(get_tool("script-outline"), {"topic": "x", "videoLength": 0})

    def test_unknown_fields_are_ignored(self):
        validate_input(get_tool("title-hook"), {"topic": "x", "extra": [1, 2]})


class TestRunTool:
    """Test dispatch to generators."""

    @pytest.mark.parametrize("slug", RUNNABLE)
    def test_every_runnable_tool_produces_output(self, slug):
        out = run_tool(get_tool(slug), {"topic": "urban gardening", "videoLength": "12"}, random.Random(5))
        assert isinstance(out, dict) and out

    def test_tool_without_generator_is_not_found(self):
        with pytest.raises(ToolNotFound) as exc_info:
            run_tool(get_tool("analytics-tracker"), {"topic": "x"}, random.Random(0))
        assert exc_info.value.detail == {"tool": "analytics-tracker"}


class TestCatalog:
    """Test template catalog lookups."""

    def test_each_title_style_has_enough_templates(self):
        for style in ("curiosity", "howTo", "list", "challenge", "comparison"):
            assert len(templates_for("title-hook", style)) >= 2
            assert category_tip(style)
        assert len(templates_for("title-hook", "hooks")) >= 5

    def test_synonym_pools(self):
        assert has_synonyms("action")
        assert not has_synonyms("topic")
        assert "30 days" in synonyms_for("time")

    @pytest.mark.parametrize(
        "call",
        [
            lambda: templates_for("title-hook", "nope"),
            lambda: templates_for("nope", "curiosity"),
            lambda: synonyms_for("topic"),
            lambda: category_tip("nope"),
            lambda: static_content("seo-toolkit", "nope"),
        ],
    )
    def test_unknown_keys_raise(self, call):
        with pytest.raises(CatalogError):
            call()

    def test_static_content_is_a_copy(self):
        tips = static_content("thumbnail-brief", "compositionTips")
        tips.clear()
        assert static_content("thumbnail-brief", "compositionTips")
