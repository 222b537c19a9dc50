"""
Constants for the Context.IO client library.
"""

# Default remote API host (the original -apiHost flag default)
DEFAULT_API_HOST = "api.context.io"

USER_AGENT = "PyContextIO Simple Library v. 0.1"

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_USER_AGENT = "User-Agent"
HEADER_CONTENT_TYPE = "Content-Type"

CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
MUTATING_METHODS = ("POST", "PUT", "DELETE")

# Default configuration values
DEFAULT_CONFIG = {
    'api_host': DEFAULT_API_HOST,
    'timeout': None,            # unbounded, same as the requests default
    'user_agent': USER_AGENT,
}
