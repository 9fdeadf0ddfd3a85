"""apiservice configuration models."""

from .config import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT, ServiceConfig

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_REQUEST_TIMEOUT",
    "ServiceConfig",
]
