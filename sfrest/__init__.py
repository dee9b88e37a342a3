"""
sfrest - authenticated client for the site factory REST API.
"""

from .api import Connection, APIResponse, RequestMethod, ResourceAccessor, RESOURCE_NAMES
from .core.config import Config
from .core.exceptions import (
    SFRestError,
    ConfigError,
    LoggerError,
    ResourceNotFoundError,
    AccessDeniedError,
    ActionForbiddenError,
    BadRequestError
)

__version__ = "0.1.0"

__all__ = [
    'Connection',
    'APIResponse',
    'RequestMethod',
    'ResourceAccessor',
    'RESOURCE_NAMES',
    'Config',
    'SFRestError',
    'ConfigError',
    'LoggerError',
    'ResourceNotFoundError',
    'AccessDeniedError',
    'ActionForbiddenError',
    'BadRequestError'
]
