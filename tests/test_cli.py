"""Tests for the claude-market CLI."""

import json
from pathlib import Path
from typing import Iterator

import pytest
import structlog
from typer.testing import CliRunner

from marketplace import __version__
from marketplace.cli.commands import app
from marketplace.core.config import get_settings

runner = CliRunner()


@pytest.fixture
def market(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    root = tmp_path / "market"
    for name in ("mobile-ux", "prod-ready", "seo-dev"):
        manifest_dir = root / "plugins" / name / ".claude-plugin"
        manifest_dir.mkdir(parents=True)
        (manifest_dir / "plugin.json").write_text(
            json.dumps({"name": name, "version": "1.0.0", "description": f"{name} plugin"}),
            encoding="utf-8",
        )
    skill = root / "plugins" / "seo-dev" / "skills" / "seo-audit"
    skill.mkdir(parents=True)
    (skill / "SKILL.md").write_text("---\nname: seo-audit\ndescription: Audit SEO\n---\n", encoding="utf-8")

    monkeypatch.setenv("MARKETPLACE_DIR", str(root))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CLAUDE_PLUGINS_DIR", raising=False)
    get_settings.cache_clear()
    yield root
    get_settings.cache_clear()


def _install_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".claude" / "plugins"


def test_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_install_seo_dev(market: Path, tmp_path: Path) -> None:
    """Test installing into a fresh plugins directory."""
    result = runner.invoke(app, ["install", "seo-dev"])

    assert result.exit_code == 0, result.output
    assert "installed successfully" in result.output
    assert "Restart Claude Code" in result.output
    link = _install_dir(tmp_path) / "seo-dev"
    assert link.is_symlink()
    assert link.resolve() == (market / "plugins" / "seo-dev").resolve()


def test_install_twice(market: Path, tmp_path: Path) -> None:
    """Test reinstalling replaces the previous link."""
    runner.invoke(app, ["install", "seo-dev"])
    result = runner.invoke(app, ["install", "seo-dev"])

    assert result.exit_code == 0
    assert "Replaced old version" in result.output
    assert [p.name for p in _install_dir(tmp_path).iterdir()] == ["seo-dev"]


def test_install_without_name(market: Path) -> None:
    """Test missing argument prints usage and available plugins."""
    result = runner.invoke(app, ["install"])

    assert result.exit_code == 1
    assert "Usage: claude-market install <plugin-name>" in result.output
    assert "Available plugins:" in result.output
    for name in ("mobile-ux", "prod-ready", "seo-dev"):
        assert f"  - {name}" in result.output


def test_install_unknown_plugin(market: Path, tmp_path: Path) -> None:
    """Test unknown plugin prints an error and the available plugins."""
    result = runner.invoke(app, ["install", "does-not-exist"])

    assert result.exit_code == 1
    assert "Error: Plugin 'does-not-exist' not found" in result.output
    assert "  - seo-dev" in result.output
    assert not _install_dir(tmp_path).exists()


def test_uninstall(market: Path, tmp_path: Path) -> None:
    """Test uninstall removes the link."""
    runner.invoke(app, ["install", "mobile-ux"])

    result = runner.invoke(app, ["uninstall", "mobile-ux"])
    assert result.exit_code == 0
    assert "uninstalled" in result.output
    assert not (_install_dir(tmp_path) / "mobile-ux").exists()

    result = runner.invoke(app, ["uninstall", "mobile-ux"])
    assert result.exit_code == 0
    assert "not installed" in result.output


def test_uninstall_real_directory_fails(market: Path, tmp_path: Path) -> None:
    """Test uninstall refuses to delete a directory."""
    (_install_dir(tmp_path) / "mobile-ux").mkdir(parents=True)

    result = runner.invoke(app, ["uninstall", "mobile-ux"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_list(market: Path) -> None:
    """Test list shows every plugin."""
    runner.invoke(app, ["install", "prod-ready"])
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    for name in ("mobile-ux", "prod-ready", "seo-dev"):
        assert name in result.output
    assert "✓" in result.output


def test_info(market: Path) -> None:
    """Test info shows manifest and skills."""
    result = runner.invoke(app, ["info", "seo-dev"])

    assert result.exit_code == 0
    assert "seo-dev" in result.output
    assert "1.0.0" in result.output
    assert "seo-audit: Audit SEO" in result.output


def test_info_unknown(market: Path) -> None:
    """Test info on an unknown plugin fails."""
    result = runner.invoke(app, ["info", "nope"])

    assert result.exit_code == 1
    assert "Plugin 'nope' not found" in result.output


def test_validate(market: Path) -> None:
    """Test validate on a consistent marketplace."""
    result = runner.invoke(app, ["validate"])

    assert result.exit_code == 0
    assert "Marketplace is valid" in result.output


def test_validate_problems(market: Path) -> None:
    """Test validate exits 1 when plugins lack manifests."""
    (market / "plugins" / "bare").mkdir()

    result = runner.invoke(app, ["validate"])

    assert result.exit_code == 1
    assert "bare: missing .claude-plugin/plugin.json" in result.output


def test_detect(tmp_path: Path) -> None:
    """Test detect prints space separated frameworks."""
    (tmp_path / "go.mod").write_text("module x\n", encoding="utf-8")
    (tmp_path / "Dockerfile").write_text("FROM scratch\n", encoding="utf-8")

    result = runner.invoke(app, ["detect", str(tmp_path)])

    assert result.exit_code == 0
    assert result.output.strip() == "go docker"


def test_detect_unknown(tmp_path: Path) -> None:
    """Test detect on an empty directory."""
    result = runner.invoke(app, ["detect", str(tmp_path)])

    assert result.exit_code == 0
    assert result.output.strip() == "unknown"


def test_detect_web(tmp_path: Path) -> None:
    """Test detect-web prints a single framework."""
    package_json = tmp_path / "package.json"
    package_json.write_text('{"dependencies": {"astro": "4"}}', encoding="utf-8")

    result = runner.invoke(app, ["detect-web", str(package_json)])

    assert result.exit_code == 0
    assert result.output.strip() == "astro"


def test_list_with_broken_manifest(market: Path) -> None:
    """Test list still shows healthy plugins next to a broken one."""
    broken = market / "plugins" / "broken" / ".claude-plugin"
    broken.mkdir(parents=True)
    (broken / "plugin.json").write_text("{", encoding="utf-8")

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, result.output
    assert "broken" in result.output
    assert "unreadable" in result.output
    assert "seo-dev" in result.output


def test_list_with_undecodable_doc(market: Path) -> None:
    """Test list does not crash on a doc that is not UTF-8."""
    commands = market / "plugins" / "mobile-ux" / "commands"
    commands.mkdir()
    (commands / "x.md").write_bytes(b"---\nname: x\n---\n\xff\xfe\n")

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "seo-dev" in result.output


def test_error_message_is_not_wrapped(market: Path) -> None:
    """Test long error messages stay on one line."""
    manifest = market / "plugins" / "seo-dev" / ".claude-plugin" / "plugin.json"
    manifest.write_text("{", encoding="utf-8")

    result = runner.invoke(app, ["info", "seo-dev"])

    assert result.exit_code == 1
    assert f"Error: Cannot read manifest {manifest.resolve()}" in result.output


def test_subcommand_bound_to_log_context() -> None:
    """Test the running subcommand is bound into the structlog context."""
    structlog.contextvars.clear_contextvars()
    try:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert structlog.contextvars.get_contextvars()["command"] == "version"
    finally:
        structlog.contextvars.clear_contextvars()
