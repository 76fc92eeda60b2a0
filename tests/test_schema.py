"""Tests for Font descriptors and font spec parsing."""

import pytest
from font_manager import Font
from font_manager import FontSpec
from pydantic import ValidationError


def test_font_defaults():
    """Test Font optional fields default to empty values."""
    font = Font(name="Inter")

    assert font.source == ""
    assert font.url is None
    assert font.meta == {}


def test_font_is_frozen():
    """Test Font descriptors are immutable."""
    font = Font(name="Inter")

    with pytest.raises(ValidationError):
        font.name = "Other"  # type: ignore[misc]


@pytest.mark.parametrize("line", ["", "   ", "# comment", "   # indented comment"])
def test_parse_skips_blank_and_comments(line):
    assert FontSpec.parse(line) is None


def test_parse_plain_name():
    spec = FontSpec.parse("  JetBrainsMono \n")

    assert spec == FontSpec(name="JetBrainsMono")
    assert not spec.is_url


def test_parse_name_with_source():
    spec = FontSpec.parse("FiraCode @ nerdfonts")

    assert spec is not None
    assert spec.name == "FiraCode"
    assert spec.source == "nerdfonts"
    assert str(spec) == "FiraCode@nerdfonts"


def test_parse_url():
    spec = FontSpec.parse("https://example.com/downloads/Hack-v3.zip")

    assert spec is not None
    assert spec.is_url
    assert spec.name == "Hack-v3"
    assert spec.source == "url"
    assert str(spec) == "https://example.com/downloads/Hack-v3.zip"


def test_parse_url_with_at_sign_is_still_url():
    """Test URLs are detected before the name@source split."""
    spec = FontSpec.parse("https://r2.fontsource.org/fonts/inter@latest/download.zip")

    assert spec is not None
    assert spec.is_url
    assert spec.name == "download"


def test_parse_empty_name_rejected():
    with pytest.raises(ValueError, match="empty font name"):
        FontSpec.parse("@nerdfonts")


def test_to_font():
    font = FontSpec.parse("http://example.com/Font.ttf").to_font()

    assert font == Font(name="Font", source="url", url="http://example.com/Font.ttf")
