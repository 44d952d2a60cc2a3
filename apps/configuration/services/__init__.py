"""Services for pricing configuration."""

from .exceptions import (
    ConfigurationServiceError,
    ConfigurationMissingError,
)
from .configuration_management import (
    CONFIGURATION_FIELDS,
    find_configuration,
    get_configuration,
    save_configuration,
)

__all__ = [
    # Exceptions
    'ConfigurationServiceError',
    'ConfigurationMissingError',
    # Configuration Management
    'CONFIGURATION_FIELDS',
    'find_configuration',
    'get_configuration',
    'save_configuration',
]
