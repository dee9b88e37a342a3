from typing import Any, Dict, Optional

class SFRestError(Exception):
    """Base exception class for all sfrest exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigError(SFRestError):
    """Raised when there is a configuration error"""
    pass

class LoggerError(SFRestError):
    """Raised when there is a logging error"""
    pass

class ResourceNotFoundError(SFRestError):
    """Raised when a requested resource accessor is not registered"""
    pass

class AccessDeniedError(SFRestError):
    """Raised when the API rejects the credentials"""
    pass

class ActionForbiddenError(SFRestError):
    """Raised when the user's role cannot perform the request"""
    pass

class BadRequestError(SFRestError):
    """Raised when the API reports a malformed request"""
    pass
