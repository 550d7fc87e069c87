"""Rexster Client

REST API client for issuing requests against a graph hosted on a Rexster server.
"""

import requests
import logging
from typing import Optional, Dict, Any, List, Callable, Mapping, Tuple

from pydantic import ValidationError

from ..model.client_model import ClientConfig, PagingFilter, RequestRecord, ResponseState
from ..response.client_response import RequestResult
from ..response.result_factory import get_generic
from ..utils.client_utils import (
    InvalidConfigError,
    RequestFailedError,
    TransportError,
    require_non_empty,
    normalize_base_url,
    encode_json_body,
    build_query_string,
    append_query_string,
)

logger = logging.getLogger(__name__)


HEADER_JSON = 'application/json'
HEADER_VND_REXSTER_JSON = 'application/vnd.rexster-v1+json'
HEADER_VND_REXSTER_TYPED_JSON = 'application/vnd.rexster-typed-v1+json'
HEADER_FORM_URLENCODED = 'application/x-www-form-urlencoded'

# Long graph queries must not be cut off: no connect limit, one hour read limit.
DEFAULT_TIMEOUT: Tuple[Optional[float], Optional[float]] = (None, 3600)

ResultFactoryCallable = Callable[[Any, Any], Any]


class RexsterClient:
    """
    Rexster REST API client.

    Holds the graph location and paging filters, owns one lazily created
    `requests.Session`, and turns method calls into HTTP requests against
    `{base_url}/graphs/{graph_name}`.

    The client is synchronous and keeps a single session; use one client per
    concurrent caller.
    """

    def __init__(self, base_url: str, graph_name: str, *,
                 result_factory: Optional[ResultFactoryCallable] = None,
                 timeout: Tuple[Optional[float], Optional[float]] = DEFAULT_TIMEOUT,
                 content_type: str = HEADER_JSON,
                 accept: str = HEADER_JSON):
        """
        Initialize the Rexster client.

        Args:
            base_url: Server url, e.g. http://localhost:8182 ('/graphs' is appended)
            graph_name: Name of the graph to address
            result_factory: Callable (client, payload) -> result used by the
                convenience methods. Defaults to ResultFactory.get_generic.
            timeout: (connect, read) timeout passed to requests
            content_type: Default Content-Type for POST/PUT requests
            accept: Default Accept header for every request

        Raises:
            InvalidConfigError: If base_url or graph_name is empty
        """
        self._session: Optional[requests.Session] = None
        self._last_request: Optional[RequestRecord] = None
        self._response_state: ResponseState = ResponseState()
        self._paging: PagingFilter = PagingFilter()

        self._config = ClientConfig(
            base_url=normalize_base_url(base_url),
            graph_name=require_non_empty(graph_name, "Invalid graph name")
        )
        self.result_factory: ResultFactoryCallable = result_factory or get_generic
        self.timeout = timeout
        self.content_type = content_type
        self.accept = accept

        logger.info(f"Rexster client initialized for graph {self._config.graph_url}")

    # Configuration

    def set_graph_name(self, graph_name: str) -> "RexsterClient":
        """
        Set the graph name.

        Raises:
            InvalidConfigError: If the name is empty after trimming
        """
        graph_name = require_non_empty(graph_name, "Invalid graph name")
        self._config = ClientConfig(base_url=self._config.base_url, graph_name=graph_name)
        return self

    def get_graph_name(self) -> str:
        return self._config.graph_name

    def set_graph_base_url(self, base_url: str) -> "RexsterClient":
        """
        Set the base url of the graph server. Trailing slashes are dropped and '/graphs' appended.

        Raises:
            InvalidConfigError: If the url is empty after trimming
        """
        self._config = ClientConfig(base_url=normalize_base_url(base_url), graph_name=self._config.graph_name)
        return self

    def get_graph_base_url(self) -> str:
        return self._config.base_url

    def get_config(self) -> ClientConfig:
        return self._config

    def set_return_keys(self, keys: Optional[List[str]]) -> "RexsterClient":
        """
        Property names to return in results (rexster.returnKeys).

        Element meta-data is always returned. When unset, all properties are returned.
        """
        if isinstance(keys, (str, bytes)):
            raise InvalidConfigError("Return keys must be a list of property names")
        return self._update_paging(return_keys=list(keys) if keys is not None else None)

    def get_return_keys(self) -> Optional[List[str]]:
        return self._paging.return_keys

    def set_offset_start(self, start: Optional[int]) -> "RexsterClient":
        """
        Start point for paging (rexster.offset.start).

        Without an end offset the server returns all remaining records.
        """
        return self._update_paging(offset_start=start)

    def get_offset_start(self) -> Optional[int]:
        return self._paging.offset_start

    def set_offset_end(self, end: Optional[int]) -> "RexsterClient":
        """
        End point for paging (rexster.offset.end).

        Without a start offset the server assumes zero.
        """
        return self._update_paging(offset_end=end)

    def get_offset_end(self) -> Optional[int]:
        return self._paging.offset_end

    def get_paging_filter(self) -> PagingFilter:
        return self._paging

    def _update_paging(self, **changes) -> "RexsterClient":
        values = self._paging.model_dump()
        values.update(changes)
        try:
            self._paging = PagingFilter(**values)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid paging filter: {e}")
        return self

    # Diagnostics

    def get_last_request(self) -> Optional[RequestRecord]:
        """Get the last request that was sent."""
        return self._last_request

    def get_response_state(self) -> ResponseState:
        return self._response_state

    def get_response_code(self) -> Optional[int]:
        """Get the HTTP status code of the last request."""
        return self._response_state.status_code

    def get_response_message(self) -> Optional[str]:
        """Get the error message reported by the server for the last request, if any."""
        return self._response_state.error_message

    def get_last_error_message(self) -> Optional[str]:
        """Alias of get_response_message()."""
        return self.get_response_message()

    def get_server_info(self) -> Dict[str, Any]:
        """
        Get information about the configured graph.

        Returns:
            Dictionary containing configuration and connection information
        """
        return {
            'base_url': self._config.base_url,
            'graph_name': self._config.graph_name,
            'graph_url': self._config.graph_url,
            'offset_start': self._paging.offset_start,
            'offset_end': self._paging.offset_end,
            'return_keys': self._paging.return_keys,
            'timeout': self.timeout,
            'content_type': self.content_type,
            'accept': self.accept,
            'is_connected': self.is_connected()
        }

    # Convenience requests

    def get_custom(self, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Perform a GET request to a custom endpoint below the graph.

        Args:
            path: Sub-path relative to the graph url, e.g. 'vertices/1'
            data: Query parameters

        Returns:
            The result factory's object for the decoded response

        Raises:
            InvalidConfigError: If path is empty
            RequestFailedError: If the server reported an error or returned nothing
            TransportError: If the HTTP exchange failed
        """
        return self._custom_request('GET', path, data)

    def post_custom(self, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a POST request to a custom endpoint with a JSON payload."""
        return self._custom_request('POST', path, data)

    def put_custom(self, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a PUT request to a custom endpoint with a JSON payload."""
        return self._custom_request('PUT', path, data)

    def delete_custom(self, path: str, data: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a DELETE request to a custom endpoint; data goes into the query string."""
        return self._custom_request('DELETE', path, data)

    def _custom_request(self, method: str, path: str, data: Optional[Mapping[str, Any]]) -> Any:
        if not path or not str(path).strip():
            raise InvalidConfigError("Invalid URL")

        result = self.make_request(method, f"/{path}", data)
        if not result:
            raise RequestFailedError(self.get_last_error_message() or "", status_code=result.status_code)

        return self.result_factory(self, result.payload)

    # Request execution

    def make_request(self, method: str, path: Optional[str] = None,
                     data: Optional[Mapping[str, Any]] = None,
                     content_type: Optional[str] = None,
                     accept: Optional[str] = None) -> RequestResult:
        """
        Make a request to the Rexster API.

        POST and PUT send `data` as a JSON body with None values removed.
        GET and DELETE send it as a query string; GET also carries the
        configured paging filters after the data parameters.

        Args:
            method: HTTP method, case-insensitive
            path: Optional sub-path appended to the graph url
            data: Request parameters
            content_type: Content-Type for POST/PUT (forced for GET, dropped for DELETE),
                defaults to the client content_type
            accept: Accept header value, defaults to the client accept

        Returns:
            RequestResult: success with the decoded payload, or application
            error when the server reported `message`/`error` or returned nothing

        Raises:
            InvalidConfigError: If method is empty
            TransportError: If the HTTP exchange could not be completed
        """
        if not method or not str(method).strip():
            raise InvalidConfigError("Invalid request method")

        method = str(method).strip().upper()
        data = dict(data) if data else {}

        url = self._config.graph_url
        if path:
            path = str(path).strip('/')
            if path:
                url += '/' + path

        content_type = content_type or self.content_type
        headers: Dict[str, str] = {'Accept': accept or self.accept}
        body: Optional[str] = None
        content_length: Optional[int] = None

        if method in ('POST', 'PUT'):
            if data:
                body = encode_json_body(data)
                content_length = len(body.encode('utf-8'))
        elif method == 'GET':
            content_type = HEADER_FORM_URLENCODED
            url = append_query_string(url, build_query_string(data))
            url = append_query_string(url, build_query_string(self._paging.to_query_params()))
        elif method == 'DELETE':
            url = append_query_string(url, build_query_string(data))
            content_type = None

        if content_length is not None:
            headers['Content-Length'] = str(content_length)

        if content_type:
            headers['Content-Type'] = content_type

        self._last_request = RequestRecord(
            method=method, url=url, headers=headers, body=body, timeout=self.timeout
        )
        previous_status_code = self._response_state.status_code
        self._response_state = ResponseState()

        logger.debug(f"Rexster {method} {url}")

        try:
            response = self._send(method, url, headers, body)
        except requests.exceptions.RequestException as e:
            self._response_state = ResponseState(error_message=str(e))
            logger.error(f"Rexster {method} request to {url} failed: {e}")
            raise TransportError(
                method,
                url,
                str(e),
                status_code=previous_status_code,
                request_options={'headers': headers, 'timeout': self.timeout, 'allow_redirects': True},
                payload=body if body is not None else data
            ) from e

        return self._classify_response(response)

    def _send(self, method: str, url: str, headers: Dict[str, str], body: Optional[str]) -> requests.Response:
        session = self._get_session()

        prepared = session.prepare_request(requests.Request(
            method=method,
            url=url,
            headers=headers,
            data=body.encode('utf-8') if body is not None else None
        ))

        # requests fills in Content-Length: 0 for body-less DELETE
        if method in ('GET', 'DELETE'):
            prepared.headers.pop('Content-Length', None)

        settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
        return session.send(prepared, timeout=self.timeout, allow_redirects=True, **settings)

    def _classify_response(self, response: requests.Response) -> RequestResult:
        status_code = response.status_code
        self._response_state = ResponseState(status_code=status_code)

        try:
            decoded = response.json()
        except ValueError:
            decoded = None

        if isinstance(decoded, dict) and (decoded.get('message') or decoded.get('error')):
            error_message = ''
            if decoded.get('message'):
                error_message += str(decoded['message'])
            if decoded.get('error'):
                error_message += str(decoded['error'])

            self._response_state = ResponseState(status_code=status_code, error_message=error_message)
            logger.warning(f"Rexster reported an error (status {status_code}): {error_message}")
            return RequestResult.application_error(error_message, status_code=status_code)

        if not decoded:
            logger.warning(f"Rexster returned an empty result (status {status_code})")
            return RequestResult.application_error(status_code=status_code)

        return RequestResult.success(decoded, status_code=status_code)

    # Connection lifecycle

    def _get_session(self) -> requests.Session:
        """Get the HTTP session, creating it on first use."""
        if self._session is None:
            self._session = requests.Session()
            logger.info("Rexster client session opened")
        return self._session

    def is_connected(self) -> bool:
        """
        Check if the client currently holds an HTTP session.

        Returns:
            True once a request has been made and until close()
        """
        return self._session is not None

    def close(self) -> None:
        """
        Release the HTTP session.

        Safe to call repeatedly and on a client that never sent a request.
        """
        if self._session is None:
            return

        session = self._session
        self._session = None
        try:
            session.close()
            logger.info("Rexster client session closed")
        except Exception as e:
            logger.warning(f"Error closing session: {e}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __del__(self):
        if getattr(self, '_session', None) is not None:
            self.close()

    def __str__(self) -> str:
        """String representation of the client."""
        status = "connected" if self.is_connected() else "disconnected"
        return f"RexsterClient(graph={self._config.graph_url}, status={status})"

    def __repr__(self) -> str:
        """Detailed string representation of the client."""
        return self.__str__()
