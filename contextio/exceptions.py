"""
Custom exceptions for the Context.IO client library.
"""


class ContextIOError(Exception):
    """Base exception for Context.IO client errors."""
    pass


class ConfigurationError(ContextIOError):
    """Raised when client configuration or request arguments are invalid."""
    pass


class UnsupportedMethodError(ContextIOError):
    """Raised when the HTTP method is not one of GET, POST, PUT, DELETE."""
    pass


class SigningError(ContextIOError):
    """Raised when the OAuth signature cannot be computed."""
    pass


class HTTPError(ContextIOError):
    """Raised when the HTTP transport fails."""
    pass
