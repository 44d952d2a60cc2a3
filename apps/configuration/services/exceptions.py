"""Domain-specific exceptions for configuration services."""


class ConfigurationServiceError(Exception):
    """Base exception for configuration services."""
    pass


class ConfigurationMissingError(ConfigurationServiceError):
    """Raised when no pricing configuration has been saved yet."""

    def __init__(self, message='Configuration settings not found.'):
        super().__init__(message)
