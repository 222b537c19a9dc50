"""
Context.IO client library.

This module builds two-legged OAuth signed requests against a single API
host and dispatches them through a requests session.
"""

import logging
import os
from typing import List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl, urlencode

import requests
from urllib3 import encode_multipart_formdata

from .auth import TwoLeggedOAuth
from .constants import (
    CONTENT_TYPE_FORM_URLENCODED,
    DEFAULT_CONFIG,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    MUTATING_METHODS,
    SUPPORTED_METHODS
)
from .exceptions import (
    ConfigurationError,
    HTTPError,
    UnsupportedMethodError
)

logger = logging.getLogger(__name__)

Params = Mapping[str, Union[str, Sequence[str]]]


def normalize_path(path: str) -> str:
    """Make sure the resource path starts with a slash."""
    if not path.startswith('/'):
        path = '/' + path
    return path


def encode_params(params: Params) -> str:
    """Form-encode params with keys sorted; list values repeat the key."""
    return urlencode(sorted(params.items()), doseq=True)


def _form_fields(request: requests.PreparedRequest) -> List[Tuple[str, str]]:
    content_type = request.headers.get(HEADER_CONTENT_TYPE, '')
    if not content_type.startswith(CONTENT_TYPE_FORM_URLENCODED) or not request.body:
        return []

    body = request.body
    if isinstance(body, bytes):
        body = body.decode('utf-8')
    return parse_qsl(body, keep_blank_values=True)


class ContextIO:
    """
    Client for making two-legged OAuth signed requests to the Context.IO API.

    The key/secret pair is fixed at construction. Every call builds a fresh
    request, so one instance can be shared between threads.
    """

    def __init__(self, key: str, secret: str, **config):
        """
        Initialize the client.

        Args:
            key: OAuth consumer key
            secret: OAuth consumer secret
            **config: Configuration options (api_host, timeout, user_agent)
        """
        self._key = key
        self._secret = secret

        # Merge default config with user overrides
        self._config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self._auth = TwoLeggedOAuth(key, secret)
        self.session = requests.Session()

    def _validate_config(self):
        """Validate client configuration."""
        if not self.key:
            raise ConfigurationError("key cannot be empty")

        if not self.secret:
            raise ConfigurationError("secret cannot be empty")

        if not self._config['api_host']:
            raise ConfigurationError("api_host cannot be empty")

        timeout = self._config['timeout']
        if isinstance(timeout, (int, float)) and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @property
    def key(self) -> str:
        return self._key

    @property
    def secret(self) -> str:
        return self._secret

    @property
    def config(self) -> dict:
        """Copy of the client configuration; changing it has no effect."""
        return dict(self._config)

    @property
    def api_host(self) -> str:
        return self._config['api_host']

    def build_url(self, path: str, query_params: Optional[Params] = None) -> str:
        """
        Build the absolute request URL.

        The path is used as given (only a leading slash is added) so that
        already-escaped resource identifiers such as ``me%40example.com``
        reach the server untouched.
        """
        url = f"https://{self.api_host}{normalize_path(path)}"
        if query_params:
            url = f"{url}?{encode_params(query_params)}"
        return url

    def new_request(
        self,
        method: str,
        path: str,
        query_params: Optional[Params] = None,
        post_params: Optional[Params] = None,
        body: Optional[str] = None
    ) -> requests.PreparedRequest:
        """
        Build a signed request.

        Args:
            method: HTTP method (GET, POST, PUT or DELETE)
            path: Resource path, e.g. ``2.0/accounts``
            query_params: Parameters appended to the URL
            post_params: Form parameters for mutating methods
            body: Already form-encoded body; exclusive with post_params

        Returns:
            Signed requests.PreparedRequest

        Raises:
            UnsupportedMethodError: If the method is not supported
            ConfigurationError: If a GET request is given a body, or both
                post_params and body are given
            SigningError: If the body is not valid form-encoded data
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(f"Unsupported HTTP method: {method}")

        headers = {HEADER_USER_AGENT: self._config['user_agent']}
        data = None

        if post_params and body is not None:
            raise ConfigurationError("pass either post_params or body, not both")

        if method in MUTATING_METHODS:
            data = body if body is not None else encode_params(post_params or {})
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_FORM_URLENCODED
        elif post_params or body:
            raise ConfigurationError(f"{method} requests cannot carry a body")

        url = self.build_url(path, query_params)
        prepared = self.session.prepare_request(
            requests.Request(method, url, headers=headers, data=data)
        )
        # requests re-quotes the URL; the path must reach the server as given
        prepared.url = url
        prepared = self._auth(prepared)

        logger.debug("Built signed request %s %s", prepared.method, prepared.url)
        return prepared

    def sign(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        """Return a copy of request carrying a fresh Authorization header."""
        return self._auth(request.copy())

    def attach_file(
        self,
        request: requests.PreparedRequest,
        field_name: str,
        file_path: str
    ) -> requests.PreparedRequest:
        """
        Return a copy of request with a multipart body holding a file upload.

        Form fields already on the request are carried over as multipart
        fields. The copy is re-signed, so its signature matches the
        multipart body; the original request is left unchanged.

        Args:
            request: Request returned by new_request
            field_name: Form field name of the file part
            file_path: Path of the file to upload

        Raises:
            OSError: If the file cannot be read
        """
        with open(file_path, 'rb') as f:
            fields = [(field_name, (os.path.basename(file_path), f.read()))]
        fields.extend(_form_fields(request))

        body, content_type = encode_multipart_formdata(fields)

        attached = request.copy()
        attached.body = body
        attached.headers[HEADER_CONTENT_TYPE] = content_type
        attached.headers.pop('Content-Length', None)
        attached.headers.pop(HEADER_AUTHORIZATION, None)
        attached.prepare_content_length(body)

        logger.debug(
            "Attached %s as %r to %s %s",
            file_path, field_name, attached.method, attached.url
        )
        return self._auth(attached)

    def send(self, request: requests.PreparedRequest) -> requests.Response:
        """
        Dispatch a prepared request.

        The caller owns the returned response and must close it.

        Raises:
            HTTPError: If the transport fails
        """
        settings = self.session.merge_environment_settings(
            request.url, {}, None, None, None
        )

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            return self.session.send(request, timeout=self._config['timeout'], **settings)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", request.method, request.url, e)
            raise HTTPError(f"HTTP request failed: {e}") from e

    def do(
        self,
        method: str,
        path: str,
        query_params: Optional[Params] = None,
        post_params: Optional[Params] = None,
        body: Optional[str] = None
    ) -> requests.Response:
        """Build, sign and send a request; returns the raw response."""
        request = self.new_request(method, path, query_params, post_params, body)
        return self.send(request)

    def do_json(
        self,
        method: str,
        path: str,
        query_params: Optional[Params] = None,
        post_params: Optional[Params] = None,
        body: Optional[str] = None
    ) -> bytes:
        """
        Send a request and return the full response body.

        The body is returned as bytes for the caller to decode as JSON.
        The response is always closed.
        """
        response = self.do(method, path, query_params, post_params, body)
        try:
            return response.content
        except requests.RequestException as e:
            raise HTTPError(f"Reading response body failed: {e}") from e
        finally:
            response.close()

    def get(self, path: str, query_params: Optional[Params] = None) -> requests.Response:
        """Make signed GET request."""
        return self.do('GET', path, query_params)

    def post(self, path: str, query_params=None, post_params=None, body=None) -> requests.Response:
        """Make signed POST request."""
        return self.do('POST', path, query_params, post_params, body)

    def put(self, path: str, query_params=None, post_params=None, body=None) -> requests.Response:
        """Make signed PUT request."""
        return self.do('PUT', path, query_params, post_params, body)

    def delete(self, path: str, query_params=None, post_params=None, body=None) -> requests.Response:
        """Make signed DELETE request."""
        return self.do('DELETE', path, query_params, post_params, body)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
