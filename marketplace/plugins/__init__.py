"""Marketplace plugin catalog and installer."""

from marketplace.plugins.catalog import ComponentInfo, ComponentKind, Marketplace, PluginInfo
from marketplace.plugins.installer import InstallResult, PluginInstaller
from marketplace.plugins.manifest import MarketplaceManifest, PluginManifest

__all__ = [
    "ComponentInfo",
    "ComponentKind",
    "InstallResult",
    "Marketplace",
    "MarketplaceManifest",
    "PluginInfo",
    "PluginInstaller",
    "PluginManifest",
]
