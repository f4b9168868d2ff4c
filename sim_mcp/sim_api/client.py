"""
Thin HTTP client for the Sim blockchain-data API.

Every method issues a single GET and returns the decoded JSON body untouched,
whatever the HTTP status. Transport failures are mapped to internal exceptions
that the tool layer turns into error envelopes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import quote

import httpx

from sim_mcp.config import API_KEY_ENV_VAR, API_KEY_HEADER, SimConfig, default_config

logger = logging.getLogger(__name__)


class SimApiError(Exception):
    """Base exception for Sim API errors."""

    retryable = False

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingApiKeyError(SimApiError):
    """Raised before any network access when no API key is configured."""


class ApiUnreachableError(SimApiError):
    """Raised when the Sim API cannot be reached."""


class ApiTimeoutError(ApiUnreachableError):
    """Raised when the Sim API does not answer within the configured timeout."""

    retryable = True


class InvalidResponseError(SimApiError):
    """Raised when the response body is not valid JSON."""


MISSING_API_KEY_MESSAGE = (
    f"{API_KEY_ENV_VAR} is missing. Please set the {API_KEY_ENV_VAR} environment "
    "variable with your Sim API key."
)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def build_query_params(params: Iterable[Tuple[str, Any]]) -> Dict[str, str]:
    """
    Serialize optional query parameters, preserving their order.

    ``None`` values are dropped entirely, sequences are comma-joined and
    booleans are rendered as ``"true"``/``"false"``.
    """
    query: Dict[str, str] = {}
    for key, value in params:
        if value is None:
            continue
        query[key] = _format_value(value)
    return query


class SimApiClient:
    """Async client for the Sim EVM and SVM endpoints."""

    def __init__(
        self,
        config: SimConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> Dict[str, str]:
        if not self.config.has_api_key:
            raise MissingApiKeyError(MISSING_API_KEY_MESSAGE)
        return {API_KEY_HEADER: self.config.api_key.strip()}

    async def _request(self, path: str, *, params: Optional[Dict[str, str]] = None) -> Any:
        headers = self._build_headers()
        client = await self._get_client()
        try:
            response = await client.get(path, params=params or None, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Sim API timed out for path %s", path)
            raise ApiTimeoutError(
                f"Sim API request timed out after {self.config.timeout}s; retry the call."
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Sim API unreachable for path %s", path)
            raise ApiUnreachableError(f"Sim API unreachable: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "Sim API returned a non-JSON body for path %s (status %s)",
                path,
                response.status_code,
            )
            raise InvalidResponseError(
                "Unexpected non-JSON response from Sim API.", status_code=response.status_code
            ) from exc

    async def get_balances(
        self,
        address: str,
        *,
        chain_ids: Optional[str | list[str]] = None,
        exclude_spam_tokens: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> Any:
        """Retrieve EVM token balances for a wallet."""
        encoded = quote(address, safe="")
        params = build_query_params(
            [
                ("chain_ids", chain_ids),
                ("exclude_spam_tokens", exclude_spam_tokens),
                ("limit", limit),
            ]
        )
        return await self._request(f"/v1/evm/balances/{encoded}", params=params)

    async def get_evm_transactions(
        self,
        address: str,
        *,
        chain_ids: Optional[str | list[str]] = None,
        limit: Optional[int] = None,
        after_block_number: Optional[int] = None,
        after_timestamp: Optional[int] = None,
        tx_hash: Optional[str] = None,
    ) -> Any:
        """Retrieve EVM transactions for a wallet."""
        encoded = quote(address, safe="")
        params = build_query_params(
            [
                ("chain_ids", chain_ids),
                ("limit", limit),
                ("after_block_number", after_block_number),
                ("after_timestamp", after_timestamp),
                ("tx_hash", tx_hash),
            ]
        )
        return await self._request(f"/v1/evm/transactions/{encoded}", params=params)

    async def get_token_price(
        self,
        contract_address: str,
        *,
        chain_ids: Optional[str | list[str]] = "all",
    ) -> Any:
        """Retrieve token info and USD price for a contract address."""
        encoded = quote(contract_address, safe="")
        params = build_query_params([("chain_ids", chain_ids)])
        return await self._request(f"/v1/evm/token-info/{encoded}", params=params)

    async def list_supported_chains_transactions(self) -> Any:
        """List chains supported by the transactions endpoint."""
        return await self._request("/v1/evm/transactions/chains")

    async def list_supported_chains_token_balances(self) -> Any:
        """List chains supported by the balances endpoint."""
        return await self._request("/v1/evm/balances/chains")

    async def get_svm_balances(
        self,
        address: str,
        *,
        chains: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[str] = None,
    ) -> Any:
        """Retrieve Solana token balances for a wallet."""
        encoded = quote(address, safe="")
        params = build_query_params(
            [
                ("chains", chains),
                ("limit", limit),
                ("offset", offset),
            ]
        )
        return await self._request(f"/beta/balances/svm/{encoded}", params=params)

    async def get_svm_transactions(
        self,
        address: str,
        *,
        limit: Optional[int] = None,
        after_block_number: Optional[int] = None,
        after_timestamp: Optional[int] = None,
        tx_hash: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> Any:
        """Retrieve Solana transactions for a wallet."""
        encoded = quote(address, safe="")
        params = build_query_params(
            [
                ("limit", limit),
                ("after_block_number", after_block_number),
                ("after_timestamp", after_timestamp),
                ("tx_hash", tx_hash),
                ("offset", offset),
            ]
        )
        return await self._request(f"/beta/transactions/svm/{encoded}", params=params)


default_client = SimApiClient()
