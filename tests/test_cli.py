"""Tests for the fm command line interface (manager injected through ctx.obj)."""

import pytest
from font_manager import FontManager
from font_manager.cli import app
from helpers import font_zip
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def manager(platform, mock_source):
    return FontManager(platform=platform, sources=[mock_source])


def invoke(manager, *args):
    return runner.invoke(app, list(args), obj=manager)


def test_install_single(manager):
    result = invoke(manager, "install", "TestFont1")

    assert result.exit_code == 0, result.output
    assert "Successfully installed TestFont1" in result.output
    assert "Successfully installed: 1" in result.output
    assert manager.installer.font_path("TestFont1").is_dir()


def test_install_summary_with_skip_and_failure(manager):
    invoke(manager, "install", "TestFont1")

    result = invoke(manager, "install", "TestFont1", "TestFont2", "NoSuchFont")

    assert result.exit_code == 1
    assert "Installation Summary:" in result.output
    assert "Successfully installed: 1" in result.output
    assert "Skipped (already installed): 1" in result.output
    assert "Failed to install: 1" in result.output
    assert "  - NoSuchFont" in result.output


def test_install_all_skipped_exits_zero(manager):
    invoke(manager, "install", "TestFont1")

    result = invoke(manager, "install", "TestFont1")

    assert result.exit_code == 0
    assert "Skipped TestFont1 (already installed)" in result.output


def test_install_requires_names_or_file(manager):
    result = invoke(manager, "install")

    assert result.exit_code == 2
    assert "Requires at least 1 font name" in result.output


def test_install_file_and_names_rejected(manager, tmp_path):
    config = tmp_path / "fonts.txt"
    config.write_text("TestFont1\n")

    result = invoke(manager, "install", "-f", str(config), "TestFont2")

    assert result.exit_code == 2
    assert "no additional font names" in result.output


def test_install_from_file(manager, tmp_path):
    config = tmp_path / "fonts.txt"
    config.write_text("# fonts\nTestFont1\n\nTestOTF@testsource\n")

    result = invoke(manager, "install", "--file", str(config))

    assert result.exit_code == 0, result.output
    assert "Successfully installed fonts from config file" in result.output
    assert manager.installer.is_installed("TestFont1")
    assert manager.installer.is_installed("TestOTF")


def test_install_from_file_with_errors(manager, tmp_path):
    config = tmp_path / "fonts.txt"
    config.write_text("TestFont1\nMissing@nowhere\n")

    result = invoke(manager, "install", "-f", str(config))

    assert result.exit_code == 1
    assert "encountered errors during installation" in result.output
    assert manager.installer.is_installed("TestFont1")


def test_install_from_missing_file(manager, tmp_path):
    result = invoke(manager, "install", "-f", str(tmp_path / "absent.txt"))

    assert result.exit_code == 1
    assert "Error opening config file" in result.output


def test_list_empty(manager):
    result = invoke(manager, "list")

    assert result.exit_code == 0
    assert "No fonts installed" in result.output


def test_list_shows_installed(manager, mock_source):
    mock_source.fonts["Mono"] = font_zip("Mono", "ttf")
    invoke(manager, "install", "Mono")

    result = invoke(manager, "list")

    assert result.exit_code == 0
    assert "Mono" in result.output
    assert "testsource" in result.output


def test_uninstall(manager):
    invoke(manager, "install", "TestFont1")

    result = invoke(manager, "uninstall", "TestFont1")

    assert result.exit_code == 0, result.output
    assert "Successfully uninstalled TestFont1" in result.output
    assert not manager.installer.is_installed("TestFont1")


def test_uninstall_not_installed(manager):
    result = invoke(manager, "uninstall", "Ghost")

    assert result.exit_code == 1
    assert "Error uninstalling Ghost" in result.output


def test_sources_in_priority_order(platform, mock_source):
    from helpers import MockSource

    manager = FontManager(platform=platform, sources=[mock_source, MockSource("second")])

    result = runner.invoke(app, ["sources"], obj=manager)

    assert result.exit_code == 0
    assert result.output.splitlines() == ["1. testsource", "2. second"]
