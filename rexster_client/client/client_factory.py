"""Rexster Client Factory

Factory function to create a configured Rexster client from
configuration settings.
"""

import logging
from typing import Optional
from .rexster_client import RexsterClient, ResultFactoryCallable
from ..config.client_config_loader import RexsterClientConfig, ClientConfigurationError
from ..utils.client_utils import RexsterClientError

logger = logging.getLogger(__name__)


def create_rexster_client(config_path: Optional[str] = None, *,
                          config: Optional[RexsterClientConfig] = None,
                          result_factory: Optional[ResultFactoryCallable] = None) -> RexsterClient:
    """
    Create a Rexster client based on configuration settings.

    Reads the server url, graph name, paging filters and timeouts from the
    client configuration and applies them to a new RexsterClient.

    Args:
        config_path: Path to the client configuration YAML file (optional if config provided)
        config: Pre-configured RexsterClientConfig object (takes precedence over config_path)
        result_factory: Optional callable (client, payload) -> result for the convenience methods

    Returns:
        RexsterClient: Configured client (no connection is opened yet)

    Raises:
        RexsterClientError: If client creation fails
        ClientConfigurationError: If configuration is invalid
    """
    try:
        if config is not None:
            client_config = config
            logger.info("Using provided config object for client creation")
        elif config_path is not None:
            client_config = RexsterClientConfig(config_path)
            logger.info(f"Loaded config from {config_path} for client creation")
        else:
            client_config = RexsterClientConfig()
            logger.info("Using default config for client creation")

        client_config.validate_config()

        client = RexsterClient(
            client_config.get_server_url(),
            client_config.get_graph_name(),
            result_factory=result_factory,
            timeout=client_config.get_request_timeout(),
            content_type=client_config.get_content_type(),
            accept=client_config.get_accept()
        )

        client.set_offset_start(client_config.get_offset_start())
        client.set_offset_end(client_config.get_offset_end())
        client.set_return_keys(client_config.get_return_keys() or None)

        logger.info(f"Created {client}")
        return client

    except ClientConfigurationError as e:
        logger.error(f"Configuration error while creating client: {e}")
        raise
    except RexsterClientError as e:
        logger.error(f"Invalid client settings: {e}")
        raise
    except Exception as e:
        logger.error(f"Unexpected error while creating client: {e}")
        raise RexsterClientError(f"Failed to create client: {e}")
