"""Plugin and marketplace manifest models."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from marketplace.core.exceptions import ManifestException

MANIFEST_DIR = ".claude-plugin"
PLUGIN_MANIFEST = "plugin.json"
MARKETPLACE_MANIFEST = "marketplace.json"
FRONTMATTER_DELIMITER = "---"


class Author(BaseModel):
    """Plugin or marketplace author."""

    model_config = ConfigDict(extra="ignore")

    name: str
    email: Optional[str] = None
    url: Optional[str] = None


class PluginManifest(BaseModel):
    """Metadata describing a plugin (``.claude-plugin/plugin.json``)."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    version: str = "0.0.0"
    description: str = ""
    author: Optional[Author] = None
    keywords: list[str] = Field(default_factory=list)
    homepage: Optional[str] = None


class MarketplaceEntry(BaseModel):
    """One plugin listed by the marketplace manifest."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    source: str
    description: str = ""


class MarketplaceManifest(BaseModel):
    """Marketplace catalogue (``.claude-plugin/marketplace.json``)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    owner: Optional[Author] = None
    plugins: list[MarketplaceEntry] = Field(default_factory=list)


def _read_json(path: Path) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestException(f"Cannot read manifest {path}: {e}", details={"path": str(path)}) from e
    if not isinstance(data, dict):
        raise ManifestException(f"Manifest {path} must be a JSON object", details={"path": str(path)})
    return data


def load_plugin_manifest(plugin_dir: Path) -> Optional[PluginManifest]:
    """Load a plugin's manifest.

    Args:
        plugin_dir: Plugin directory

    Returns:
        Parsed manifest, or None when the plugin ships none

    Raises:
        ManifestException: If the manifest exists but is invalid
    """
    path = plugin_dir / MANIFEST_DIR / PLUGIN_MANIFEST
    data = _read_json(path)
    if data is None:
        return None
    try:
        return PluginManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestException(
            f"Invalid plugin manifest {path}",
            details={"path": str(path), "errors": e.errors(include_url=False)},
        ) from e


def load_marketplace_manifest(root: Path) -> Optional[MarketplaceManifest]:
    """Load the marketplace manifest from the marketplace root.

    Args:
        root: Marketplace root directory

    Returns:
        Parsed manifest, or None when absent

    Raises:
        ManifestException: If the manifest exists but is invalid
    """
    path = root / MANIFEST_DIR / MARKETPLACE_MANIFEST
    data = _read_json(path)
    if data is None:
        return None
    try:
        return MarketplaceManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestException(
            f"Invalid marketplace manifest {path}",
            details={"path": str(path), "errors": e.errors(include_url=False)},
        ) from e


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a Markdown document into YAML frontmatter and body.

    Args:
        text: Document text

    Returns:
        Tuple of (frontmatter dict, body). Documents without frontmatter
        return an empty dict and the text unchanged.

    Raises:
        ManifestException: If the frontmatter is not a YAML mapping
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, text

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        return {}, text

    try:
        meta = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as e:
        raise ManifestException(f"Invalid frontmatter: {e}") from e
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ManifestException("Frontmatter must be a mapping")
    return meta, body
