"""
Rexster Client

Python client for the Rexster graph server REST API.
"""

from .client.rexster_client import RexsterClient
from .client.client_factory import create_rexster_client
from .config.client_config_loader import RexsterClientConfig, ClientConfigurationError
from .response.client_response import RequestOutcome, RequestResult, RexsterObject
from .response.result_factory import ResultFactory
from .utils.client_utils import (
    RexsterClientError,
    InvalidConfigError,
    RequestFailedError,
    TransportError,
)

__version__ = '0.1.0'

__all__ = [
    'RexsterClient',
    'create_rexster_client',
    'RexsterClientConfig',
    'ClientConfigurationError',
    'RequestOutcome',
    'RequestResult',
    'RexsterObject',
    'ResultFactory',
    'RexsterClientError',
    'InvalidConfigError',
    'RequestFailedError',
    'TransportError',
]
