"""
Connection to the API and the resource accessors it hands out.
"""

from .connection import (
    Connection,
    APIResponse,
    RequestMethod,
    ERROR_PATTERNS,
    PING_URI,
    access_check,
    decode_body
)

from .resources import (
    ResourceAccessor,
    RESOURCES,
    RESOURCE_NAMES
)

__all__ = [
    'Connection',
    'APIResponse',
    'RequestMethod',
    'ERROR_PATTERNS',
    'PING_URI',
    'access_check',
    'decode_body',
    'ResourceAccessor',
    'RESOURCES',
    'RESOURCE_NAMES'
]
