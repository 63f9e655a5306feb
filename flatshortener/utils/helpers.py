"""Helper utilities for request handlers.

Functions:
    base_url() -> str
        Extract correct public base URL from a handler event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    parse_body() -> dict
        Decode a JSON or form-urlencoded request body
    normalize_url() -> str
        Validate and normalize an absolute target URL
    validate_alias() -> str
        Validate a custom alias against [0-9A-Za-z_-]+
    isoformat_utc() -> str / parse_isoformat() -> datetime
        Convert datetimes to and from the store's ISO-8601 representation
    guarantee_500_response(handler) -> Callable
        Decorator: Convert unexpected handler errors into HTTP 500 responses

Example:
    Typical usage inside a handler:

        >>> from flatshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "sho.rt",
        ...         "protocol": "https"
        ...     }
        ... }
        >>> base_url(event)
        'https://sho.rt'

        >>> base_url({}, public_base_url='https://go.example.com/')
        'https://go.example.com'

        >>> base_url({})
        'http://localhost:3000'
"""

import re
import json
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable
from urllib.parse import urlsplit, urlunsplit, parse_qs

from flatshortener.constants import ALIAS_PATTERN, UNKNOWN_INTERNAL_SERVER_ERROR, Defaults
from flatshortener.exceptions import InvalidURLError, InvalidAliasError
from flatshortener.utils.runtime import running_locally
from flatshortener.utils.responses import response_500


logger = logging.getLogger(__name__)

DEFAULT_PORTS = {'http': 80, 'https': 443, 'ws': 80, 'wss': 443, 'ftp': 21}
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def base_url(event: dict[str, Any], public_base_url: str | None = None) -> str:
    """Extract public base URL from a handler event

    A configured public base URL always wins. Otherwise the scheme and Host
    header of the incoming request are used, as seen by the server.

    Args:
        event (dict): handler event built from the incoming HTTP request
        public_base_url (str | None): configured PUBLIC_BASE_URL, if any

    Returns:
        str: Base URL without trailing slash, e.g.:
             - "https://go.example.com"
             - "http://127.0.0.1:3000"
    """
    if public_base_url:
        return public_base_url.rstrip('/')

    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    protocol = request_context.get('protocol') or 'http'

    if domain:
        return f'{protocol}://{domain}'
    else:
        # Fallback: direct invocation (tests, scripts, etc.)
        return f'http://localhost:{Defaults.PORT}'


def get_short_url(shortcode: str, event: dict[str, Any], public_base_url: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): handler event built from the incoming HTTP request
        public_base_url (str | None): configured PUBLIC_BASE_URL, if any

    Returns:
        str: short url string representation
    """
    return f'{base_url(event, public_base_url)}/{shortcode}'


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the request body as JSON or as an HTML form submission

    Raises:
        ValueError: If the body is not valid JSON or not a JSON object.
    """
    body = event.get('body') or ''
    headers = event.get('headers') or {}
    content_type = headers.get('content-type', '')

    if content_type.startswith(FORM_CONTENT_TYPE):
        return {key: values[0] for key, values in parse_qs(body).items()}

    try:
        data = json.loads(body or '{}')
    except RecursionError as e:
        raise ValueError('Request body is nested too deeply.') from e
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object.')
    return data


def normalize_url(url: Any) -> str:
    """Validate an absolute URL and return its normalized form

    Normalization lowercases the scheme and host, drops the scheme's default
    port and turns an empty path into '/'.

    Args:
        url (Any):
            Candidate target URL taken from the request.

    Returns:
        str: normalized URL.

    Raises:
        InvalidURLError:
            If `url` is not a string, has no scheme or has no host.

    Example:
        >>> normalize_url('HTTPS://Example.COM:443')
        'https://example.com/'
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError('URL must be a non-empty string.')

    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL '{url}'.") from e

    scheme = parts.scheme.lower()
    if not scheme or not parts.hostname:
        raise InvalidURLError(f"Invalid URL '{url}' (expected an absolute URL with a host).")

    userinfo, at, hostport = parts.netloc.rpartition('@')
    hostport = hostport.lower()
    if port is not None and DEFAULT_PORTS.get(scheme) == port:
        hostport = hostport.rsplit(':', 1)[0]

    path = parts.path or '/'
    return urlunsplit((scheme, f'{userinfo}{at}{hostport}', path, parts.query, parts.fragment))


def validate_alias(alias: Any) -> str:
    """Return `alias` unchanged if it is a valid custom alias

    Raises:
        InvalidAliasError: If alias is not a string made of letters, digits, '_' or '-'.
    """
    if not isinstance(alias, str) or not re.fullmatch(ALIAS_PATTERN, alias):
        raise InvalidAliasError(f'Invalid custom alias {alias!r}. Use letters, numbers, _ or -.')
    return alias


def isoformat_utc(dt: datetime) -> str:
    """Render an aware datetime as UTC ISO-8601 with milliseconds and a 'Z' suffix.

    Example:
        >>> isoformat_utc(datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
        '2025-10-15T12:00:00.000Z'
    """
    # fmt: off
    return dt.astimezone(UTC) \
             .isoformat(timespec='milliseconds') \
             .replace('+00:00', 'Z')
    # fmt: on


def utcnow() -> datetime:
    """Return the current UTC time truncated to the millisecond precision of the store file."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def parse_isoformat(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime (naive values are taken as UTC)."""
    dt = datetime.fromisoformat(value)
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def guarantee_500_response(handler: Callable[..., dict]) -> Callable[..., dict]:
    """Decorator: respond with HTTP 500 when a handler raises unexpectedly

    When running locally the original exception is re-raised instead, so the
    traceback reaches the developer's console.
    """

    @functools.wraps(handler)
    def wrapper(event: dict, context: Any) -> dict:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled error in request handler. Responding with 500.',
                extra={'handler': handler.__module__, 'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
