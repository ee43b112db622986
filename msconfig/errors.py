"""Configuration errors."""


class ConfigError(Exception):
    """Raised when a configuration is invalid or modified after being frozen."""
    pass


class ConfigFormatError(ConfigError):
    """Raised when a configuration document or value cannot be parsed."""
    pass


class NoAvailableEntryError(ValueError):
    """Raised when a load balancer is asked to choose from no entries."""
    pass
