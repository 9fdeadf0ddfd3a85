"""Async JSON API client with bearer authentication and typed decoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Generic, TypeVar, Union
from urllib.parse import urljoin, urlsplit

import aiohttp

from ..endpoints import Endpoint
from ..errors import (
    APIError,
    EncodingFailedError,
    InvalidURLError,
    RequestFailedError,
    UnexpectedError,
)
from ..models.config import ServiceConfig
from .codec import JsonCodec, _preview
from .protocols import HttpResponse, PreparedRequest
from .transport import classify_transport_error

T = TypeVar("T")

ALLOWED_SCHEMES = frozenset({"http", "https"})
SUCCESS_STATUS = range(200, 300)


@dataclass(frozen=True)
class DecodeAs(Generic[T]):
    """Decode the response body into ``response_type``."""

    response_type: type[T]

    def handle(self, codec: JsonCodec, data: bytes) -> T:
        return codec.decode(data, self.response_type)


@dataclass(frozen=True)
class ParseJSON:
    """Parse the response body as generic JSON, no schema."""

    def handle(self, codec: JsonCodec, data: bytes) -> Any:
        return codec.parse(data)


ResponseHandling = Union[DecodeAs[Any], ParseJSON]

_NO_BODY: Any = object()


class APIService:
    """
    Async client for a JSON REST backend.

    Resolves endpoint paths against a base URL, sends JSON with an optional
    bearer token, validates the status code and decodes the body. Every
    failure surfaces as exactly one ``APIError`` subclass; nothing is retried.

    The service holds no per-call state, so one instance can serve concurrent
    requests. When no session is supplied, an ``aiohttp.ClientSession`` is
    created on first use and closed by ``close()`` or on leaving ``async with``.

    Example:
        async with APIService(base_url="https://api.example.com", token=token) as api:
            user = await api.get(Route("/users/{id}", id=42), User)
            raw = await api.get_json(Route("/health"))
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        codec: JsonCodec | None = None,
        logger: logging.Logger | None = None,
        config: ServiceConfig | None = None,
    ) -> None:
        """
        Initialize the service. Performs no I/O.

        Args:
            base_url: Base URL endpoint paths resolve against (default: config.base_url)
            token: Bearer token sent as ``Authorization: Bearer <token>`` (default: config.token)
            session: Pre-built aiohttp session; never closed by this service
            timeout: Connect and total timeout in seconds for an owned session
                (default: config.request_timeout, 5 seconds)
            codec: JSON encoder/decoder (default: JsonCodec())
            logger: Logger for request tracing (default: module logger)
            config: ServiceConfig supplying defaults for the above
        """
        config = config or ServiceConfig()
        self._base_url = base_url if base_url is not None else config.base_url
        self._token = token if token is not None else config.token
        self._timeout = timeout if timeout is not None else config.request_timeout
        self._codec = codec or JsonCodec()
        self._logger = logger or logging.getLogger(__name__)

        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: ServiceConfig, **kwargs: Any) -> APIService:
        """Create a service from configuration; keyword arguments override it."""
        return cls(config=config, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self) -> APIService:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this service created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout, connect=self._timeout),
            )
        return self._session

    def build_url(self, endpoint: Endpoint) -> str:
        """
        Resolve the endpoint path against the base URL.

        Resolution follows RFC 3986, so an absolute path ("/users/42")
        replaces any path on the base URL while a relative one ("users/42")
        is appended after the base URL's last "/".

        Raises:
            InvalidURLError: If the result is not an absolute http(s) URL
        """
        path = endpoint.path()
        if any(ch.isspace() or ord(ch) < 32 or ord(ch) == 127 for ch in path):
            raise InvalidURLError(path)
        try:
            url = urljoin(self._base_url, path)
            parts = urlsplit(url)
            hostname = parts.hostname
        except ValueError as e:
            raise InvalidURLError(path) from e
        if parts.scheme not in ALLOWED_SCHEMES or not hostname:
            raise InvalidURLError(url)
        return url

    def make_request(self, url: str, method: str, body: bytes | None = None) -> PreparedRequest:
        """Assemble headers and body; the Authorization header is set only with a token."""
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return PreparedRequest(method=method, url=url, headers=headers, body=body)

    def _encode(self, body: Any) -> bytes:
        try:
            return self._codec.encode(body)
        except APIError:
            raise
        except Exception as e:
            self._logger.error(f"Encoding error: {e}")
            raise EncodingFailedError(e) from e

    async def _send(self, request: PreparedRequest) -> HttpResponse:
        session = self._get_session()
        async with session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
        ) as response:
            content = await response.read()
            return HttpResponse(
                status_code=response.status,
                content=content,
                content_type=response.headers.get("Content-Type", ""),
                url=str(response.url),
            )

    def _validate(self, response: Any) -> None:
        status = getattr(response, "status_code", None)
        if not isinstance(status, int):
            raise UnexpectedError(ValueError("Bad server response: no HTTP status"))
        if status not in SUCCESS_STATUS:
            self._logger.warning(f"HTTP status code: {status}")
            raise RequestFailedError(status, response.content)

    async def _execute(
        self,
        method: str,
        endpoint: Endpoint,
        handling: ResponseHandling,
        body: Any = _NO_BODY,
    ) -> Any:
        label = f"{method} JSON" if isinstance(handling, ParseJSON) else method
        url: str | None = None
        try:
            url = self.build_url(endpoint)
            if body is _NO_BODY:
                self._logger.debug(f"{label} {url}")
                payload = None
            else:
                self._logger.debug(f"{label} {url} body: {body!r}")
                payload = self._encode(body)

            request = self.make_request(url, method, payload)
            response = await self._send(request)
            self._logger.debug(
                f"RESPONSE {response.status_code} {response.url} "
                f"content-type: {response.content_type or '-'} data: {_preview(response.content)}"
            )
            self._validate(response)
            return handling.handle(self._codec, response.content)

        except APIError as e:
            self._logger.error(f"{label} error: {e!r} | URL: {url}")
            raise
        except Exception as e:
            error = classify_transport_error(e)
            self._logger.error(f"{label} error: {error!r} ({type(e).__name__}: {e}) | URL: {url}")
            raise error from e

    async def get(self, endpoint: Endpoint, response_type: type[T]) -> T:
        """GET the endpoint and decode the body into ``response_type``."""
        return await self._execute("GET", endpoint, DecodeAs(response_type))  # type: ignore[no-any-return]

    async def post(self, endpoint: Endpoint, body: Any, response_type: type[T]) -> T:
        """POST ``body`` as JSON and decode the body into ``response_type``."""
        return await self._execute("POST", endpoint, DecodeAs(response_type), body)  # type: ignore[no-any-return]

    async def put(self, endpoint: Endpoint, body: Any, response_type: type[T]) -> T:
        """PUT ``body`` as JSON and decode the body into ``response_type``."""
        return await self._execute("PUT", endpoint, DecodeAs(response_type), body)  # type: ignore[no-any-return]

    async def delete(self, endpoint: Endpoint, response_type: type[T]) -> T:
        """DELETE the endpoint and decode the body into ``response_type``."""
        return await self._execute("DELETE", endpoint, DecodeAs(response_type))  # type: ignore[no-any-return]

    async def get_json(self, endpoint: Endpoint) -> Any:
        return await self._execute("GET", endpoint, ParseJSON())

    async def post_json(self, endpoint: Endpoint, body: Any) -> Any:
        return await self._execute("POST", endpoint, ParseJSON(), body)

    async def put_json(self, endpoint: Endpoint, body: Any) -> Any:
        return await self._execute("PUT", endpoint, ParseJSON(), body)

    async def delete_json(self, endpoint: Endpoint) -> Any:
        return await self._execute("DELETE", endpoint, ParseJSON())
