"""Ports for provider-agnostic ingestion."""

from .http import HttpResponse, IHttpClient  # noqa: F401
from .provider import IChainDataProvider  # noqa: F401

__all__ = [
    "IHttpClient",
    "HttpResponse",
    "IChainDataProvider",
]
