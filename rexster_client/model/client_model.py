"""Rexster Client Model Classes

Pydantic models for client configuration, paging filters and the
per-call request/response diagnostics kept by the client.
"""

from typing import Dict, List, Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientConfig(BaseModel):
    """Validated graph location. Replaced as a whole on every change."""
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        description="Graph base url including the '/graphs' suffix",
        examples=["http://localhost:8182/graphs"]
    )
    graph_name: str = Field(
        ...,
        description="Name of the graph on the Rexster server",
        examples=["tinkergraph"]
    )

    @field_validator('base_url', 'graph_name')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def graph_url(self) -> str:
        """Url of the graph resource itself."""
        return f"{self.base_url}/{self.graph_name}"


class PagingFilter(BaseModel):
    """Paging and field selection applied to GET requests."""
    offset_start: Optional[int] = Field(
        None,
        description="Start offset (rexster.offset.start), sent even when 0"
    )
    offset_end: Optional[int] = Field(
        None,
        description="End offset (rexster.offset.end), sent only when positive"
    )
    return_keys: Optional[List[str]] = Field(
        None,
        description="Property names to return (rexster.returnKeys)"
    )

    def to_query_params(self) -> Dict[str, Any]:
        """Filter parameters in the order they are appended to a GET url."""
        params: Dict[str, Any] = {}
        if self.offset_start is not None:
            params['rexster.offset.start'] = self.offset_start
        if self.offset_end is not None and self.offset_end > 0:
            params['rexster.offset.end'] = self.offset_end
        if self.return_keys:
            params['rexster.returnKeys'] = ','.join(self.return_keys)
        return params


class RequestRecord(BaseModel):
    """The last request sent by a client."""
    model_config = ConfigDict(frozen=True)

    method: str = Field(..., description="HTTP method")
    url: str = Field(..., description="Full request url including the query string")
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: Optional[str] = Field(None, description="Serialized request body")
    timeout: Optional[Any] = Field(None, description="(connect, read) timeout passed to the session")


class ResponseState(BaseModel):
    """Outcome of the most recent call."""
    status_code: Optional[int] = Field(None, description="HTTP status code")
    error_message: Optional[str] = Field(None, description="Error text reported by the server")
