"""
Two-legged OAuth 1.0 signing for requests.

Only the consumer key/secret pair is used; no resource-owner token is sent,
so the signing key is ``secret&``.
"""

import logging

from oauthlib.oauth1 import Client, SIGNATURE_HMAC, SIGNATURE_TYPE_AUTH_HEADER
from requests.auth import AuthBase

from .constants import (
    CONTENT_TYPE_FORM_URLENCODED,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE
)
from .exceptions import SigningError

logger = logging.getLogger(__name__)


class TwoLeggedOAuth(AuthBase):
    """
    Attach an ``Authorization: OAuth ...`` header to a prepared request.

    The signature covers the method, the URL with its query string and,
    for form-encoded bodies, the body parameters. Multipart bodies do not
    contribute parameters (RFC 5849 section 3.4.1.3.1).
    """

    def __init__(self, key: str, secret: str):
        self.key = key
        self.client = Client(
            key,
            client_secret=secret,
            signature_method=SIGNATURE_HMAC,
            signature_type=SIGNATURE_TYPE_AUTH_HEADER,
        )

    def __call__(self, request):
        headers = {}
        body = None

        content_type = request.headers.get(HEADER_CONTENT_TYPE, '')
        if content_type.startswith(CONTENT_TYPE_FORM_URLENCODED):
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_FORM_URLENCODED
            body = request.body or ''

        try:
            if isinstance(body, bytes):
                body = body.decode('utf-8')
            _, signed_headers, _ = self.client.sign(
                request.url,
                request.method,
                body,
                headers
            )
        except ValueError as e:
            raise SigningError(f"Unable to sign {request.method} {request.url}: {e}") from e

        request.headers[HEADER_AUTHORIZATION] = signed_headers[HEADER_AUTHORIZATION]
        logger.debug("Signed %s %s for key %s...", request.method, request.url, self.key[:4])
        return request
