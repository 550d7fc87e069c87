"""
Rexster Client Configuration Loader

This module provides functionality to load and validate Rexster client configuration
from YAML files for connecting to Rexster graph servers.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


DEFAULT_SERVER_URL = 'http://localhost:8182'
DEFAULT_GRAPH_NAME = 'tinkergraph'
DEFAULT_TIMEOUT = 3600
JSON_CONTENT_TYPE = 'application/json'

SERVER_URL_ENV = 'REXSTER_CLIENT_SERVER_URL'
GRAPH_NAME_ENV = 'REXSTER_CLIENT_GRAPH_NAME'


class ClientConfigurationError(Exception):
    """Raised when there are client configuration loading or validation errors."""
    pass


class RexsterClientConfig:
    """
    Rexster client configuration loader and manager.

    Loads configuration from YAML files and provides access to configuration
    sections for connecting to Rexster servers.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the client configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default locations or built-in defaults.
        """
        self.config_data: Dict[str, Any] = {}
        self.config_path: Optional[str] = None

        if config_path is not None:
            self.load_config(config_path)
        else:
            self._load_default_config()

    def load_config(self, config_path: str) -> None:
        """
        Load configuration from a specific file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ClientConfigurationError: If the file cannot be loaded or parsed
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ClientConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}

            self.config_path = str(config_file.absolute())
            logger.info(f"Loaded client configuration from: {self.config_path}")

        except yaml.YAMLError as e:
            raise ClientConfigurationError(f"Error parsing YAML configuration: {e}")
        except OSError as e:
            raise ClientConfigurationError(f"Error loading configuration file: {e}")

        if not isinstance(self.config_data, dict):
            raise ClientConfigurationError("Configuration root must be a mapping")

    def _load_default_config(self) -> None:
        """
        Load default configuration by searching standard locations or using built-in defaults.
        """
        default_paths = [
            "rexsterclient-config.yaml",
            "rexsterclient_config/rexsterclient-config.yaml",
            os.path.expanduser("~/.rexster/rexsterclient-config.yaml"),
            "/etc/rexster/rexsterclient-config.yaml"
        ]

        for path in default_paths:
            if os.path.exists(path):
                try:
                    self.load_config(path)
                    logger.info(f"Found and loaded default config from: {path}")
                    return
                except ClientConfigurationError as e:
                    logger.warning(f"Skipping unreadable config {path}: {e}")
                    continue

        self.config_data = {
            'server': {
                'url': DEFAULT_SERVER_URL,
                'graph_name': DEFAULT_GRAPH_NAME
            },
            'paging': {
                'offset_start': None,
                'offset_end': None,
                'return_keys': []
            },
            'client': {
                'timeout': DEFAULT_TIMEOUT,
                'connect_timeout': None,
                'content_type': JSON_CONTENT_TYPE,
                'accept': JSON_CONTENT_TYPE
            }
        }
        self.config_path = "<built-in defaults>"
        logger.info("Using built-in default configuration")

    def get_server_config(self) -> Dict[str, Any]:
        """
        Get server configuration section.

        Returns:
            Dictionary containing server configuration
        """
        return self.config_data.get('server') or {}

    def get_paging_config(self) -> Dict[str, Any]:
        """
        Get paging configuration section.

        Returns:
            Dictionary containing paging configuration
        """
        return self.config_data.get('paging') or {}

    def get_client_config(self) -> Dict[str, Any]:
        """
        Get client configuration section.

        Returns:
            Dictionary containing client configuration
        """
        return self.config_data.get('client') or {}

    def get_server_url(self) -> str:
        """
        Get the Rexster server URL. The REXSTER_CLIENT_SERVER_URL environment variable wins.

        Returns:
            Server URL string
        """
        env_url = os.environ.get(SERVER_URL_ENV)
        if env_url:
            return env_url
        return self.get_server_config().get('url', DEFAULT_SERVER_URL)

    def get_graph_name(self) -> str:
        """
        Get the graph name. The REXSTER_CLIENT_GRAPH_NAME environment variable wins.

        Returns:
            Graph name string
        """
        env_graph = os.environ.get(GRAPH_NAME_ENV)
        if env_graph:
            return env_graph
        return self.get_server_config().get('graph_name', DEFAULT_GRAPH_NAME)

    def get_offset_start(self) -> Optional[int]:
        return self.get_paging_config().get('offset_start')

    def get_offset_end(self) -> Optional[int]:
        return self.get_paging_config().get('offset_end')

    def get_return_keys(self) -> List[str]:
        return self.get_paging_config().get('return_keys') or []

    def get_timeout(self) -> Optional[float]:
        """
        Get the read timeout in seconds.

        Returns:
            Timeout in seconds
        """
        return self.get_client_config().get('timeout', DEFAULT_TIMEOUT)

    def get_connect_timeout(self) -> Optional[float]:
        """
        Get the connect timeout in seconds. None waits indefinitely.

        Returns:
            Connect timeout in seconds or None
        """
        return self.get_client_config().get('connect_timeout')

    def get_request_timeout(self) -> Tuple[Optional[float], Optional[float]]:
        """(connect, read) timeout tuple as accepted by requests."""
        return self.get_connect_timeout(), self.get_timeout()

    def get_content_type(self) -> str:
        return self.get_client_config().get('content_type') or JSON_CONTENT_TYPE

    def get_accept(self) -> str:
        return self.get_client_config().get('accept') or JSON_CONTENT_TYPE

    def validate_config(self) -> None:
        """
        Validate the loaded configuration.

        Raises:
            ClientConfigurationError: If configuration is invalid
        """
        server_url = self.get_server_url()
        if not server_url or not isinstance(server_url, str) or not server_url.strip():
            raise ClientConfigurationError("Server URL must be a non-empty string")

        if not server_url.strip().startswith(('http://', 'https://')):
            raise ClientConfigurationError("Server URL must start with http:// or https://")

        graph_name = self.get_graph_name()
        if not graph_name or not isinstance(graph_name, str) or not graph_name.strip():
            raise ClientConfigurationError("Graph name must be a non-empty string")

        timeout = self.get_timeout()
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ClientConfigurationError("Timeout must be a positive number")

        connect_timeout = self.get_connect_timeout()
        if connect_timeout is not None and (isinstance(connect_timeout, bool) or not isinstance(connect_timeout, (int, float)) or connect_timeout <= 0):
            raise ClientConfigurationError("Connect timeout must be a positive number")

        for name, value in (('offset_start', self.get_offset_start()), ('offset_end', self.get_offset_end())):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise ClientConfigurationError(f"{name} must be a non-negative integer")

        return_keys = self.get_return_keys()
        if not isinstance(return_keys, list) or not all(isinstance(key, str) for key in return_keys):
            raise ClientConfigurationError("return_keys must be a list of strings")

        logger.info("Client configuration validation passed")

    def __str__(self) -> str:
        """String representation of the configuration."""
        return (f"RexsterClientConfig(path={self.config_path}, server_url={self.get_server_url()}, "
                f"graph_name={self.get_graph_name()})")


# Global client configuration instance
_client_config_instance: Optional[RexsterClientConfig] = None


def get_client_config(config_path: Optional[str] = None) -> RexsterClientConfig:
    """
    Get the global client configuration instance.

    Args:
        config_path: Optional path to configuration file. Only used on first call.

    Returns:
        RexsterClientConfig instance
    """
    global _client_config_instance

    if _client_config_instance is None:
        _client_config_instance = RexsterClientConfig(config_path)
        _client_config_instance.validate_config()

    return _client_config_instance


def reload_client_config(config_path: Optional[str] = None) -> RexsterClientConfig:
    """
    Reload the global client configuration instance.

    Args:
        config_path: Optional path to configuration file

    Returns:
        New RexsterClientConfig instance
    """
    global _client_config_instance

    _client_config_instance = RexsterClientConfig(config_path)
    _client_config_instance.validate_config()

    return _client_config_instance
