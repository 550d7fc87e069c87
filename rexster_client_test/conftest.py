import json
import logging
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

# Add the parent directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rexster_client.client.rexster_client import RexsterClient

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')


BASE_URL = "http://localhost:8182"
GRAPH_NAME = "tinkergraph"
GRAPH_URL = f"{BASE_URL}/graphs/{GRAPH_NAME}"


def make_response(body, status_code: int = 200) -> requests.Response:
    """Build a requests.Response with a JSON (or raw bytes) body."""
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode('utf-8')
    response.headers['Content-Type'] = 'application/json'
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def client():
    """A client pointed at a local tinkergraph."""
    rexster_client = RexsterClient(BASE_URL, GRAPH_NAME)
    yield rexster_client
    rexster_client.close()


@pytest.fixture
def mock_send():
    """Patch Session.send so no request leaves the process; returns the mock."""
    with patch.object(requests.Session, 'send') as send:
        send.return_value = make_response({"version": "2.6.0", "results": [], "queryTime": 0.5})
        yield send


def sent_request(send) -> requests.PreparedRequest:
    """The PreparedRequest passed to the most recent Session.send call."""
    return send.call_args.args[0]
