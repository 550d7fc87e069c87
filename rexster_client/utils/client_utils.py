"""
Rexster Client Utilities

Shared exceptions and encoding helpers for Rexster client requests.
"""

import json
from typing import Dict, Any, Optional, List, Mapping, Tuple
from urllib.parse import urlencode


class RexsterClientError(Exception):
    """Base exception for Rexster client errors."""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidConfigError(RexsterClientError):
    """Raised when a required argument (graph name, base url, method, path) is empty."""
    pass


class RequestFailedError(RexsterClientError):
    """Raised when the Rexster server answered with an error or an empty result."""
    pass


class TransportError(RexsterClientError):
    """
    Raised when the HTTP exchange itself could not be completed.

    Carries everything needed to diagnose the failed call: the method and url,
    the last known response code, the transport error text, the outgoing
    request options and the payload.
    """

    def __init__(self, method: str, url: str, transport_error: str,
                 status_code: Optional[int] = None,
                 request_options: Optional[Dict[str, Any]] = None,
                 payload: Any = None):
        self.method = method
        self.url = url
        self.transport_error = transport_error
        self.request_options = request_options or {}
        self.payload = payload

        message = f"{method} request to {url} failed. Response Code: {status_code}"
        message += f" - Transport Error: {transport_error}"
        message += f" - Request Options: {self.request_options}"
        message += f" - Payload: {payload!r}"
        super().__init__(message, status_code=status_code)


def require_non_empty(value: Optional[str], error_message: str) -> str:
    """
    Trim a required string argument.

    Args:
        value: Raw argument value
        error_message: Message for the raised error

    Returns:
        The trimmed value

    Raises:
        InvalidConfigError: If the value is None or empty after trimming
    """
    if value is None:
        raise InvalidConfigError(error_message)

    value = str(value).strip()
    if not value:
        raise InvalidConfigError(error_message)

    return value


def normalize_base_url(base_url: Optional[str]) -> str:
    """Validate a graph base url and return it with trailing slashes replaced by '/graphs'."""
    base_url = require_non_empty(base_url, "Invalid base url")
    return base_url.rstrip('/') + '/graphs'


def normalize_text_value(value: Any) -> Any:
    """
    Convert raw bytes values to text so they serialize as JSON strings.

    Bytes that are not valid UTF-8 are read as ISO-8859-1.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode('utf-8')
        except UnicodeDecodeError:
            return bytes(value).decode('iso-8859-1')
    return value


def encode_json_body(data: Mapping[str, Any]) -> str:
    """
    Serialize a POST/PUT payload.

    Keys whose value is None are dropped before encoding.
    """
    cleaned = {
        key: normalize_text_value(value)
        for key, value in data.items()
        if value is not None
    }
    return json.dumps(cleaned, separators=(',', ':'))


def _flatten_query_value(key: str, value: Any, pairs: List[Tuple[str, Any]]) -> None:
    if value is None:
        return

    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten_query_value(f"{key}[{sub_key}]", sub_value, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten_query_value(f"{key}[{index}]", item, pairs)
    elif isinstance(value, bool):
        pairs.append((key, '1' if value else '0'))
    else:
        pairs.append((key, normalize_text_value(value)))


def build_query_string(data: Optional[Mapping[str, Any]]) -> str:
    """
    Build a form-encoded query string.

    None values are skipped, booleans become 1/0, lists expand to
    key[0]=..&key[1]=.. and nested mappings to key[sub]=..

    Args:
        data: Parameter name-value pairs

    Returns:
        Encoded query string without a leading '?'
    """
    if not data:
        return ""

    pairs: List[Tuple[str, Any]] = []
    for key, value in data.items():
        _flatten_query_value(str(key), value, pairs)

    return urlencode(pairs)


def append_query_string(url: str, query: str) -> str:
    """Append a query string to a url, joining with '&' when the url already has one."""
    if not query:
        return url
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}{query}"
