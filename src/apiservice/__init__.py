"""
apiservice - Async JSON API client with bearer auth and a closed error taxonomy.

Usage:
    from apiservice import APIService, Route, RequestFailedError

    async with APIService(base_url="https://api.example.com", token=token) as api:
        try:
            user = await api.get(Route("/users/{id}", id=42), User)
        except RequestFailedError as e:
            print(e.status_code, e.message)
"""

__version__ = "1.0.0"

from .endpoints import Endpoint, Route
from .errors import (
    APIError,
    APIErrorKind,
    DecodingFailedError,
    EncodingFailedError,
    InvalidURLError,
    NoInternetConnectionError,
    RequestFailedError,
    RequestTimedOutError,
    ServerUnavailableError,
    UnexpectedError,
)
from .http import APIService, APIServiceProtocol, JsonCodec
from .models.config import ServiceConfig

__all__ = [
    "__version__",
    # Core
    "APIService",
    "APIServiceProtocol",
    "JsonCodec",
    # Endpoints
    "Endpoint",
    "Route",
    # Config
    "ServiceConfig",
    # Errors
    "APIError",
    "APIErrorKind",
    "DecodingFailedError",
    "EncodingFailedError",
    "InvalidURLError",
    "NoInternetConnectionError",
    "RequestFailedError",
    "RequestTimedOutError",
    "ServerUnavailableError",
    "UnexpectedError",
]
