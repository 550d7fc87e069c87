"""
Rexster Client Utilities

Shared exceptions and helper functions for Rexster client operations.
"""

from .client_utils import (
    RexsterClientError,
    InvalidConfigError,
    RequestFailedError,
    TransportError,
    require_non_empty,
    normalize_base_url,
    encode_json_body,
    build_query_string,
    append_query_string,
)

__all__ = [
    'RexsterClientError',
    'InvalidConfigError',
    'RequestFailedError',
    'TransportError',
    'require_non_empty',
    'normalize_base_url',
    'encode_json_body',
    'build_query_string',
    'append_query_string',
]
