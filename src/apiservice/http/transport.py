"""Translation of low-level transport exceptions into APIError kinds."""

from __future__ import annotations

import asyncio
import errno

import aiohttp

from ..errors import (
    APIError,
    NoInternetConnectionError,
    RequestTimedOutError,
    ServerUnavailableError,
    UnexpectedError,
)

# OS error codes meaning the device itself has no usable network
NO_NETWORK_ERRNOS = frozenset({errno.ENETUNREACH, errno.ENETDOWN, errno.EHOSTDOWN})

# Host refused, unreachable or dropped the connection
SERVER_UNREACHABLE_ERRNOS = frozenset(
    {errno.ECONNREFUSED, errno.EHOSTUNREACH, errno.ECONNRESET, errno.ECONNABORTED, errno.EPIPE}
)

# Connection dropped after it was established
CONNECTION_LOST_EXCEPTIONS = (
    aiohttp.ServerDisconnectedError,
    aiohttp.ClientPayloadError,
    ConnectionResetError,
    ConnectionAbortedError,
    BrokenPipeError,
)


def _os_errno(exc: BaseException) -> int | None:
    if isinstance(exc, aiohttp.ClientConnectorError):
        return exc.os_error.errno
    if isinstance(exc, OSError):
        return exc.errno
    return None


def classify_transport_error(exc: Exception) -> APIError:
    """
    Map an exception raised while sending a request to exactly one APIError.

    The mapping is deterministic:
        - network down / unreachable    -> NoInternetConnectionError
        - any timeout                   -> RequestTimedOutError
        - connect, DNS, connection lost -> ServerUnavailableError
        - APIError                      -> returned unchanged
        - anything else                 -> UnexpectedError

    Args:
        exc: Exception raised by the transport

    Returns:
        The APIError to raise in its place
    """
    if isinstance(exc, APIError):
        return exc

    # ServerTimeoutError is also a ClientConnectionError, so check timeouts first
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return RequestTimedOutError(exc)

    if _os_errno(exc) in NO_NETWORK_ERRNOS:
        return NoInternetConnectionError(exc)

    if isinstance(exc, aiohttp.ClientConnectorError):
        return ServerUnavailableError(exc)

    if isinstance(exc, CONNECTION_LOST_EXCEPTIONS):
        return ServerUnavailableError(exc)

    if _os_errno(exc) in SERVER_UNREACHABLE_ERRNOS:
        return ServerUnavailableError(exc)

    return UnexpectedError(exc)
