"""Installs marketplace plugins into the local Claude Code plugins directory."""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from marketplace.core.config import get_settings
from marketplace.core.exceptions import PluginInstallException, PluginNotFoundException
from marketplace.core.logging import get_logger
from marketplace.plugins.catalog import Marketplace

logger = get_logger(__name__)


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a plugin installation."""

    name: str
    link: Path
    target: Path
    replaced: bool = False


def _remove_entry(path: Path) -> None:
    # Dangling symlinks report exists() == False, so check is_symlink() first
    if path.is_symlink() or path.is_file():
        path.unlink()
    else:
        shutil.rmtree(path)


class PluginInstaller:
    """Symlinks marketplace plugins into the Claude Code plugins directory."""

    def __init__(
        self,
        marketplace: Optional[Marketplace] = None,
        install_dir: Optional[Path] = None,
    ) -> None:
        """Initialize installer.

        Args:
            marketplace: Marketplace to install from
            install_dir: Claude Code plugins directory
        """
        self.marketplace = marketplace or Marketplace()
        self.install_dir = install_dir or get_settings().install_dir

    def link_path(self, name: str) -> Path:
        return self.install_dir / name

    def install(self, name: str) -> InstallResult:
        """Install plugin by linking it into the plugins directory.

        Any previous installation under the same name is removed first.

        Args:
            name: Plugin name

        Returns:
            Install result

        Raises:
            PluginNotFoundException: If the marketplace has no such plugin
            PluginInstallException: If the filesystem operation fails
        """
        if not name:
            raise PluginNotFoundException(name, self.marketplace.available())
        target = self.marketplace.plugin_path(name)
        link = self.link_path(name)

        try:
            self.install_dir.mkdir(parents=True, exist_ok=True)

            replaced = link.exists() or link.is_symlink()
            if replaced:
                logger.warning("plugin_already_installed_replacing", name=name, path=str(link))
                _remove_entry(link)

            link.symlink_to(target, target_is_directory=True)
        except OSError as e:
            logger.error("plugin_install_failed", name=name, error=str(e), exc_info=True)
            raise PluginInstallException(
                f"Failed to install plugin '{name}': {e}",
                details={"plugin": name, "link": str(link), "target": str(target)},
            ) from e

        logger.info("plugin_installed", name=name, link=str(link), target=str(target))
        return InstallResult(name=name, link=link, target=target, replaced=replaced)

    def uninstall(self, name: str) -> bool:
        """Remove an installed plugin link.

        Args:
            name: Plugin name

        Returns:
            True if a link was removed, False if nothing was installed

        Raises:
            PluginInstallException: If the entry is not a symlink or removal fails
        """
        link = self.link_path(name)
        if not link.is_symlink():
            if link.exists():
                raise PluginInstallException(
                    f"'{link}' is not a marketplace link, refusing to remove it",
                    details={"plugin": name, "link": str(link)},
                )
            return False

        try:
            link.unlink()
        except OSError as e:
            raise PluginInstallException(
                f"Failed to uninstall plugin '{name}': {e}",
                details={"plugin": name, "link": str(link)},
            ) from e

        logger.info("plugin_uninstalled", name=name, link=str(link))
        return True

    def is_installed(self, name: str) -> bool:
        """Check whether a plugin is linked from this marketplace.

        Args:
            name: Plugin name

        Returns:
            True if installed from this marketplace
        """
        link = self.link_path(name)
        if not link.is_symlink():
            return False
        plugins_dir = self.marketplace.plugins_dir.resolve()
        return link.resolve().parent == plugins_dir

    def installed(self) -> list[str]:
        """List plugins installed from this marketplace.

        Returns:
            Sorted plugin names
        """
        if not self.install_dir.is_dir():
            return []
        return sorted(p.name for p in self.install_dir.iterdir() if self.is_installed(p.name))
