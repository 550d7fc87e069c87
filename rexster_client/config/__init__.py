from .client_config_loader import (
    RexsterClientConfig,
    ClientConfigurationError,
    get_client_config,
    reload_client_config,
)

__all__ = [
    'RexsterClientConfig',
    'ClientConfigurationError',
    'get_client_config',
    'reload_client_config',
]
