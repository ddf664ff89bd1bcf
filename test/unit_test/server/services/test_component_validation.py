"""Unit tests for component content validation."""

import pytest

from uxperiment.server.services.components import (
    CSS_MAX_LENGTH,
    HTML_MAX_LENGTH,
    is_valid_color,
    normalize_color,
    validate_component,
)

CSS = ".card { padding: 1rem; }"


def test_valid_component_has_no_findings():
    result = validate_component("Glass Card", CSS, "<div class='card'></div>", "#A1B2C3")

    assert result.is_valid is True
    assert result.errors == []
    assert result.warnings == []


@pytest.mark.parametrize("name", [None, "", "   "])
def test_missing_name(name):
    result = validate_component(name, CSS)

    assert result.is_valid is False
    assert result.errors == ["Name is required"]


@pytest.mark.parametrize(
    ("name", "valid"),
    [
        ("ab", False),
        ("  ab  ", False),
        ("abc", True),
        ("  abc  ", True),
        ("x" * 100, True),
        ("x" * 101, False),
    ],
)
def test_name_length_is_measured_after_trimming(name, valid):
    assert validate_component(name, CSS).is_valid is valid


def test_missing_css_is_an_error():
    result = validate_component("Card", "   ")

    assert "CSS content is required" in result.errors


def test_css_length_limit():
    css = "{" + "a" * (CSS_MAX_LENGTH - 2) + "}"

    assert validate_component("Card", css).is_valid is True
    assert validate_component("Card", css + " ").is_valid is False


def test_incomplete_css_is_only_a_warning():
    result = validate_component("Card", "color: red;")

    assert result.is_valid is True
    assert result.warnings == ["CSS appears incomplete"]


def test_html_length_limit():
    result = validate_component("Card", CSS, "a" * (HTML_MAX_LENGTH + 1))

    assert result.errors == [f"HTML content must be at most {HTML_MAX_LENGTH} characters"]


@pytest.mark.parametrize("html", ["<script>x()</script>", "<ScRiPt src='a.js'>", "<p>hi</p><script"])
def test_script_tags_rejected_case_insensitively(html):
    result = validate_component("Card", CSS, html)

    assert result.errors == ["Script tags are not allowed in HTML content"]


def test_invalid_color_is_a_warning():
    result = validate_component("Card", CSS, color="#12345")

    assert result.is_valid is True
    assert result.warnings == ["Invalid color '#12345', using default #6366F1"]


def test_errors_accumulate():
    result = validate_component("a", "", "<script>")

    assert len(result.errors) == 3


@pytest.mark.parametrize(
    ("color", "valid"),
    [("#6366F1", True), ("#abcdef", True), ("6366F1", False), ("#12345", False), ("#GGGGGG", False), (None, False)],
)
def test_is_valid_color(color, valid):
    assert is_valid_color(color) is valid


def test_normalize_color_falls_back_to_default():
    assert normalize_color("#abcdef") == "#abcdef"
    assert normalize_color("red") == "#6366F1"
    assert normalize_color(None) == "#6366F1"
