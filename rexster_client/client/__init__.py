from .rexster_client import (
    RexsterClient,
    HEADER_JSON,
    HEADER_VND_REXSTER_JSON,
    HEADER_VND_REXSTER_TYPED_JSON,
    HEADER_FORM_URLENCODED,
)
from .client_factory import create_rexster_client

__all__ = [
    'RexsterClient',
    'create_rexster_client',
    'HEADER_JSON',
    'HEADER_VND_REXSTER_JSON',
    'HEADER_VND_REXSTER_TYPED_JSON',
    'HEADER_FORM_URLENCODED',
]
