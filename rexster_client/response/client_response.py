"""
Rexster Client Response Models

Result objects returned by the Rexster client.

`RequestResult` is what `RexsterClient.make_request` returns for every
completed HTTP exchange. `RexsterObject` is the generic wrapper built by the
result factory for the convenience methods.
"""

from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..utils.client_utils import RequestFailedError


class RequestOutcome(str, Enum):
    """Classification of a completed HTTP exchange."""
    SUCCESS = "success"
    APPLICATION_ERROR = "application_error"


class RequestResult(BaseModel):
    """
    Outcome of a single request that reached the server.

    Either a success carrying the decoded JSON payload, or an application
    error (the server reported `message`/`error`, or returned nothing).
    Transport failures never produce a result; they raise `TransportError`.

    The result is falsy on application error so callers may write
    `if not client.make_request(...)`.
    """

    outcome: RequestOutcome = Field(description="Success or application error")
    payload: Any = Field(default=None, description="Decoded JSON body on success")
    status_code: Optional[int] = Field(default=None, description="HTTP status code")
    error_message: Optional[str] = Field(default=None, description="Server error text, if any")

    @classmethod
    def success(cls, payload: Any, status_code: Optional[int] = None) -> "RequestResult":
        return cls(outcome=RequestOutcome.SUCCESS, payload=payload, status_code=status_code)

    @classmethod
    def application_error(cls, error_message: Optional[str] = None,
                          status_code: Optional[int] = None) -> "RequestResult":
        return cls(outcome=RequestOutcome.APPLICATION_ERROR,
                   error_message=error_message, status_code=status_code)

    @property
    def is_success(self) -> bool:
        """Check if the server returned a usable payload."""
        return self.outcome == RequestOutcome.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if the server reported an error or returned nothing."""
        return self.outcome == RequestOutcome.APPLICATION_ERROR

    def __bool__(self) -> bool:
        return self.is_success

    def raise_for_error(self):
        """Raise RequestFailedError if this result is an application error."""
        if self.is_error:
            raise RequestFailedError(self.error_message or "", status_code=self.status_code)


class RexsterObject(BaseModel):
    """
    Generic wrapper around a decoded Rexster response.

    Rexster wraps results in an envelope such as
    `{"version": "2.x", "results": [...], "totalSize": 3, "queryTime": 1.2}`.
    The raw payload is kept unchanged in `data`.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: Any = Field(default=None, exclude=True, repr=False, description="Client that produced the response")
    data: Any = Field(default=None, description="Decoded JSON payload")

    def _envelope(self, key: str) -> Any:
        if isinstance(self.data, dict):
            return self.data.get(key)
        return None

    @property
    def results(self) -> Any:
        """The `results` member, or the whole payload when there is no envelope."""
        if isinstance(self.data, dict) and 'results' in self.data:
            return self.data['results']
        return self.data

    @property
    def version(self) -> Optional[str]:
        return self._envelope('version')

    @property
    def query_time(self) -> Optional[float]:
        return self._envelope('queryTime')

    @property
    def total_size(self) -> Optional[int]:
        return self._envelope('totalSize')

    @property
    def is_list(self) -> bool:
        """Check if the results are a list of elements."""
        return isinstance(self.results, list)

    @property
    def count(self) -> int:
        """Number of elements in the results."""
        results = self.results
        if isinstance(results, list):
            return len(results)
        return 0 if results is None else 1

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


class RexsterElement(RexsterObject):
    """A single graph element (vertex or edge) keyed by `_id` and `_type`."""

    @property
    def element_id(self) -> Any:
        return self._element().get('_id')

    @property
    def element_type(self) -> Optional[str]:
        return self._element().get('_type')

    @property
    def properties(self) -> Dict[str, Any]:
        """Element properties without the underscore-prefixed meta-data."""
        return {key: value for key, value in self._element().items() if not key.startswith('_')}

    def _element(self) -> Dict[str, Any]:
        results = self.results
        return results if isinstance(results, dict) else {}


class RexsterElementList(RexsterObject):
    """A list of graph elements."""

    @property
    def elements(self) -> List[RexsterElement]:
        return [RexsterElement(client=self.client, data={'results': item}) for item in self.results]
