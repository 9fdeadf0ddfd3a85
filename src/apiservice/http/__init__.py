"""HTTP client, codec and transport error mapping for apiservice."""

from .client import APIService, DecodeAs, ParseJSON, ResponseHandling
from .codec import JsonCodec
from .protocols import APIServiceProtocol, HttpResponse, PreparedRequest
from .transport import classify_transport_error

__all__ = [
    "APIService",
    "APIServiceProtocol",
    "DecodeAs",
    "HttpResponse",
    "JsonCodec",
    "ParseJSON",
    "PreparedRequest",
    "ResponseHandling",
    "classify_transport_error",
]
