"""Shared fixtures: zip archives, a mock platform and a mock font source."""

import pytest
from helpers import MockPlatform
from helpers import MockSource
from helpers import build_zip
from helpers import font_zip


@pytest.fixture
def platform(tmp_path):
    platform = MockPlatform(tmp_path)
    (tmp_path / "system").mkdir()
    return platform


@pytest.fixture
def mock_source():
    source = MockSource()
    source.fonts["TestFont1"] = font_zip("TestFont1", "ttf")
    source.fonts["TestFont2"] = font_zip("TestFont2", "ttf")
    source.fonts["TestTTF"] = font_zip("TestTTF", "ttf")
    source.fonts["TestOTF"] = font_zip("TestOTF", "otf")
    source.fonts["TestMulti"] = font_zip("TestMulti", "ttf", "otf")
    source.failures["FailingFont"] = RuntimeError("simulated failure")
    return source


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_font_zip():
    return font_zip
