#!/usr/bin/env python3
"""
Tests for RexsterClientConfig loading/validation and create_rexster_client.
"""

from unittest.mock import patch

import pytest
import requests
import yaml

from rexster_client.client.client_factory import create_rexster_client
from rexster_client.client.rexster_client import HEADER_VND_REXSTER_JSON, HEADER_VND_REXSTER_TYPED_JSON
from rexster_client.config.client_config_loader import (
    RexsterClientConfig,
    ClientConfigurationError,
    SERVER_URL_ENV,
    GRAPH_NAME_ENV,
)

from conftest import make_response


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    monkeypatch.delenv(SERVER_URL_ENV, raising=False)
    monkeypatch.delenv(GRAPH_NAME_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, data) -> str:
    config_file = tmp_path / "rexster-test-config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding='utf-8')
    return str(config_file)


def test_load_yaml_config(tmp_path):
    path = write_config(tmp_path, {
        'server': {'url': 'http://rexster:8182', 'graph_name': 'gratefulgraph'},
        'paging': {'offset_start': 0, 'offset_end': 50, 'return_keys': ['name']},
        'client': {'timeout': 120, 'connect_timeout': 5}
    })

    config = RexsterClientConfig(path)
    config.validate_config()

    assert config.get_server_url() == 'http://rexster:8182'
    assert config.get_graph_name() == 'gratefulgraph'
    assert config.get_offset_start() == 0
    assert config.get_offset_end() == 50
    assert config.get_return_keys() == ['name']
    assert config.get_request_timeout() == (5, 120)
    assert config.config_path.endswith("rexster-test-config.yaml")


def test_built_in_defaults_when_no_file_found():
    config = RexsterClientConfig()
    config.validate_config()
    assert config.config_path == "<built-in defaults>"
    assert config.get_server_url() == 'http://localhost:8182'
    assert config.get_graph_name() == 'tinkergraph'
    assert config.get_request_timeout() == (None, 3600)


def test_default_location_in_working_directory(tmp_path):
    (tmp_path / "rexsterclient-config.yaml").write_text(
        yaml.safe_dump({'server': {'url': 'http://found:8182', 'graph_name': 'found'}}), encoding='utf-8'
    )
    config = RexsterClientConfig()
    assert config.get_server_url() == 'http://found:8182'


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = write_config(tmp_path, {'server': {'url': 'http://file:8182', 'graph_name': 'filegraph'}})
    monkeypatch.setenv(SERVER_URL_ENV, 'http://env:8182')
    monkeypatch.setenv(GRAPH_NAME_ENV, 'envgraph')

    config = RexsterClientConfig(path)
    assert config.get_server_url() == 'http://env:8182'
    assert config.get_graph_name() == 'envgraph'


def test_missing_file_raises():
    with pytest.raises(ClientConfigurationError, match="not found"):
        RexsterClientConfig("/nonexistent/rexster.yaml")


def test_invalid_yaml_raises(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("server: [unclosed", encoding='utf-8')
    with pytest.raises(ClientConfigurationError, match="parsing YAML"):
        RexsterClientConfig(str(config_file))


@pytest.mark.parametrize("data, message", [
    ({'server': {'url': 'ftp://rexster', 'graph_name': 'g'}}, "http"),
    ({'server': {'url': 'http://rexster', 'graph_name': '  '}}, "Graph name"),
    ({'server': {'url': 'http://rexster', 'graph_name': 'g'}, 'client': {'timeout': 0}}, "Timeout"),
    ({'server': {'url': 'http://rexster', 'graph_name': 'g'}, 'paging': {'offset_end': -1}}, "offset_end"),
    ({'server': {'url': 'http://rexster', 'graph_name': 'g'}, 'paging': {'return_keys': 'name'}}, "return_keys"),
])
def test_validate_rejects_bad_settings(tmp_path, data, message):
    config = RexsterClientConfig(write_config(tmp_path, data))
    with pytest.raises(ClientConfigurationError, match=message):
        config.validate_config()


def test_factory_applies_configuration(tmp_path):
    path = write_config(tmp_path, {
        'server': {'url': 'http://rexster:8182/', 'graph_name': 'gratefulgraph'},
        'paging': {'offset_start': 10, 'offset_end': 20, 'return_keys': ['name', 'age']},
        'client': {'timeout': 60}
    })

    client = create_rexster_client(path)

    assert client.get_graph_base_url() == 'http://rexster:8182/graphs'
    assert client.get_graph_name() == 'gratefulgraph'
    assert client.get_offset_start() == 10
    assert client.get_offset_end() == 20
    assert client.get_return_keys() == ['name', 'age']
    assert client.timeout == (None, 60)
    assert client.is_connected() is False


def test_factory_accepts_config_object():
    config = RexsterClientConfig()
    config.config_data['server']['graph_name'] = 'objectgraph'
    client = create_rexster_client(config=config)
    assert client.get_graph_name() == 'objectgraph'
    assert client.get_return_keys() is None


def test_factory_propagates_configuration_errors(tmp_path):
    path = write_config(tmp_path, {'server': {'url': 'not-a-url', 'graph_name': 'g'}})
    with pytest.raises(ClientConfigurationError):
        create_rexster_client(path)


def test_factory_applies_configured_headers(tmp_path):
    path = write_config(tmp_path, {
        'server': {'url': 'http://rexster:8182', 'graph_name': 'gratefulgraph'},
        'client': {'accept': HEADER_VND_REXSTER_TYPED_JSON, 'content_type': HEADER_VND_REXSTER_JSON}
    })

    with patch.object(requests.Session, 'send') as send:
        send.return_value = make_response({"results": [1]})
        with create_rexster_client(path) as client:
            client.make_request('POST', 'vertices', {"name": "marko"})

    request = send.call_args.args[0]
    assert request.headers['Accept'] == HEADER_VND_REXSTER_TYPED_JSON
    assert request.headers['Content-Type'] == HEADER_VND_REXSTER_JSON
    assert client.get_server_info()['accept'] == HEADER_VND_REXSTER_TYPED_JSON
