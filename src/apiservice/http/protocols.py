"""Protocol definitions for the API service abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from ..endpoints import Endpoint

T = TypeVar("T")


@dataclass(frozen=True)
class PreparedRequest:
    """
    Fully assembled request, ready to hand to the transport session.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE)
        url: Absolute request URL
        headers: Request headers
        body: Encoded JSON body, None for GET/DELETE
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response read in full from the transport.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str
    url: str


class APIServiceProtocol(Protocol):
    """
    Public surface of an API service.

    Typed operations decode the response into ``response_type``; the
    ``*_json`` variants return the parsed JSON value without a schema.
    Every operation raises exactly one ``APIError`` subclass on failure.
    """

    @property
    def base_url(self) -> str: ...

    async def get(self, endpoint: Endpoint, response_type: type[T]) -> T: ...

    async def post(self, endpoint: Endpoint, body: Any, response_type: type[T]) -> T: ...

    async def put(self, endpoint: Endpoint, body: Any, response_type: type[T]) -> T: ...

    async def delete(self, endpoint: Endpoint, response_type: type[T]) -> T: ...

    async def get_json(self, endpoint: Endpoint) -> Any: ...

    async def post_json(self, endpoint: Endpoint, body: Any) -> Any: ...

    async def put_json(self, endpoint: Endpoint, body: Any) -> Any: ...

    async def delete_json(self, endpoint: Endpoint) -> Any: ...
