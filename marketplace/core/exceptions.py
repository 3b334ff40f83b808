"""Custom exceptions for the plugin marketplace."""


class MarketplaceException(Exception):
    """Base exception for all marketplace errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PluginException(MarketplaceException):
    """Exceptions related to marketplace plugins."""

    pass


class PluginNotFoundException(PluginException):
    """Requested plugin is not in the marketplace."""

    def __init__(self, plugin_name: str, available: list[str] | None = None) -> None:
        """Initialize with the missing name and the plugins that do exist.

        Args:
            plugin_name: Requested plugin name
            available: Plugin names present in the marketplace
        """
        self.plugin_name = plugin_name
        self.available = list(available or [])
        super().__init__(
            f"Plugin '{plugin_name}' not found",
            details={"plugin": plugin_name, "available": self.available},
        )


class PluginInstallException(PluginException):
    """Installing or removing a plugin link failed."""

    pass


class ManifestException(PluginException):
    """Plugin or marketplace manifest is malformed."""

    pass

