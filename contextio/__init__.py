"""
Context.IO Client Library

A Python client library that signs API requests for Context.IO with
two-legged OAuth 1.0 and sends them to a single API host.

Example usage:
    from contextio import ContextIO

    client = ContextIO("your-key", "your-secret")
    accounts = json.loads(client.do_json("GET", "2.0/accounts"))
"""

from .auth import TwoLeggedOAuth
from .client import ContextIO, encode_params, normalize_path
from .exceptions import (
    ContextIOError,
    ConfigurationError,
    UnsupportedMethodError,
    SigningError,
    HTTPError
)
from .constants import (
    DEFAULT_API_HOST,
    DEFAULT_CONFIG,
    SUPPORTED_METHODS,
    USER_AGENT
)

__version__ = "0.1.0"
__all__ = [
    "ContextIO",
    "TwoLeggedOAuth",
    "encode_params",
    "normalize_path",
    "ContextIOError",
    "ConfigurationError",
    "UnsupportedMethodError",
    "SigningError",
    "HTTPError",
    "DEFAULT_API_HOST",
    "DEFAULT_CONFIG",
    "SUPPORTED_METHODS",
    "USER_AGENT"
]
