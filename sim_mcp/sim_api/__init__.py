"""HTTP client wrappers for the Sim API."""

from .client import (
    ApiTimeoutError,
    ApiUnreachableError,
    InvalidResponseError,
    MissingApiKeyError,
    SimApiClient,
    SimApiError,
    build_query_params,
    default_client,
)

__all__ = [
    "SimApiClient",
    "SimApiError",
    "MissingApiKeyError",
    "ApiUnreachableError",
    "ApiTimeoutError",
    "InvalidResponseError",
    "build_query_params",
    "default_client",
]
