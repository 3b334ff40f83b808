"""Marketplace catalog: discovers plugins and their components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from marketplace.core.config import get_settings
from marketplace.core.exceptions import ManifestException, PluginNotFoundException
from marketplace.core.logging import get_logger
from marketplace.plugins.manifest import (
    PluginManifest,
    load_marketplace_manifest,
    load_plugin_manifest,
    parse_frontmatter,
)

logger = get_logger(__name__)


class ComponentKind(str, Enum):
    """Kinds of content a plugin bundles."""

    SKILL = "skill"  # skills/<name>/SKILL.md
    AGENT = "agent"  # agents/<name>.md
    COMMAND = "command"  # commands/<name>.md


@dataclass
class ComponentInfo:
    """A skill, agent or command shipped by a plugin."""

    kind: ComponentKind
    name: str
    description: str
    path: Path


@dataclass
class PluginInfo:
    """A plugin directory and everything discovered inside it."""

    name: str
    path: Path
    manifest: Optional[PluginManifest] = None
    skills: list[ComponentInfo] = field(default_factory=list)
    agents: list[ComponentInfo] = field(default_factory=list)
    commands: list[ComponentInfo] = field(default_factory=list)

    @property
    def version(self) -> Optional[str]:
        return self.manifest.version if self.manifest else None

    @property
    def description(self) -> str:
        return self.manifest.description if self.manifest else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "skills": len(self.skills),
            "agents": len(self.agents),
            "commands": len(self.commands),
        }


def _read_component(kind: ComponentKind, doc: Path, default_name: str) -> ComponentInfo:
    try:
        text = doc.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestException(f"Cannot read {doc}: {e}", details={"path": str(doc)}) from e
    meta, _ = parse_frontmatter(text)
    return ComponentInfo(
        kind=kind,
        name=str(meta.get("name") or default_name),
        description=str(meta.get("description") or ""),
        path=doc,
    )


class Marketplace:
    """Read-only view of the plugins shipped by a marketplace checkout."""

    def __init__(self, plugins_dir: Optional[Path] = None) -> None:
        """Initialize marketplace.

        Args:
            plugins_dir: Directory containing plugin directories
        """
        self.plugins_dir = plugins_dir or get_settings().plugins_dir

    @property
    def root(self) -> Path:
        return self.plugins_dir.parent

    def available(self) -> list[str]:
        """List plugin directory names, sorted.

        Returns:
            Plugin names
        """
        if not self.plugins_dir.is_dir():
            logger.warning("plugins_directory_not_found", path=str(self.plugins_dir))
            return []
        return sorted(
            p.name for p in self.plugins_dir.iterdir() if p.is_dir() and not p.name.startswith(".")
        )

    def exists(self, name: str) -> bool:
        """Check if a plugin directory exists.

        Args:
            name: Plugin name

        Returns:
            True if the marketplace has the plugin
        """
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            return False
        return (self.plugins_dir / name).is_dir()

    def plugin_path(self, name: str) -> Path:
        """Get the directory of a plugin.

        Args:
            name: Plugin name

        Returns:
            Absolute plugin path

        Raises:
            PluginNotFoundException: If the plugin does not exist
        """
        if not self.exists(name):
            raise PluginNotFoundException(name, self.available())
        return (self.plugins_dir / name).resolve()

    def get_plugin(self, name: str) -> PluginInfo:
        """Get plugin with its manifest and components.

        Args:
            name: Plugin name

        Returns:
            Plugin info

        Raises:
            PluginNotFoundException: If the plugin does not exist
            ManifestException: If a manifest or frontmatter is malformed
        """
        path = self.plugin_path(name)
        info = PluginInfo(name=name, path=path, manifest=load_plugin_manifest(path))

        skills_dir = path / "skills"
        if skills_dir.is_dir():
            for doc in sorted(skills_dir.glob("*/SKILL.md")):
                info.skills.append(_read_component(ComponentKind.SKILL, doc, doc.parent.name))

        for kind, subdir, bucket in (
            (ComponentKind.AGENT, "agents", info.agents),
            (ComponentKind.COMMAND, "commands", info.commands),
        ):
            docs_dir = path / subdir
            if docs_dir.is_dir():
                for doc in sorted(docs_dir.glob("*.md")):
                    bucket.append(_read_component(kind, doc, doc.stem))

        logger.debug(
            "plugin_scanned",
            name=name,
            skills=len(info.skills),
            agents=len(info.agents),
            commands=len(info.commands),
        )
        return info

    def list_plugins(self) -> list[dict[str, Any]]:
        """List all plugins.

        A plugin whose manifest or docs cannot be read is still listed, with
        its problem under ``error``.

        Returns:
            List of plugin info dictionaries
        """
        plugins: list[dict[str, Any]] = []
        for name in self.available():
            try:
                entry = self.get_plugin(name).to_dict()
                entry["error"] = None
            except ManifestException as e:
                logger.warning("plugin_unreadable", name=name, error=e.message)
                entry = PluginInfo(name=name, path=self.plugins_dir / name).to_dict()
                entry["error"] = e.message
            plugins.append(entry)
        return plugins

    def validate(self) -> list[str]:
        """Check the marketplace for inconsistencies.

        Returns:
            Human readable problems; empty when the marketplace is consistent
        """
        problems: list[str] = []

        for name in self.available():
            try:
                info = self.get_plugin(name)
            except ManifestException as e:
                problems.append(f"{name}: {e.message}")
                continue
            if info.manifest is None:
                problems.append(f"{name}: missing .claude-plugin/plugin.json")
            elif info.manifest.name != name:
                problems.append(
                    f"{name}: manifest name '{info.manifest.name}' does not match directory"
                )

        try:
            catalogue = load_marketplace_manifest(self.root)
        except ManifestException as e:
            problems.append(f"marketplace: {e.message}")
            catalogue = None

        if catalogue is not None:
            for entry in catalogue.plugins:
                source = (self.root / entry.source).resolve()
                if not source.is_dir():
                    problems.append(f"marketplace: source '{entry.source}' for '{entry.name}' not found")

        logger.info("marketplace_validated", problems=len(problems))
        return problems
