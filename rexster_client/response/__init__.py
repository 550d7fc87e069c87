from .client_response import (
    RequestOutcome,
    RequestResult,
    RexsterObject,
    RexsterElement,
    RexsterElementList,
)
from .result_factory import ResultFactory, get_generic

__all__ = [
    'RequestOutcome',
    'RequestResult',
    'RexsterObject',
    'RexsterElement',
    'RexsterElementList',
    'ResultFactory',
    'get_generic',
]
