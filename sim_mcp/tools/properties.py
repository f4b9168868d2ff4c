"""Reusable JSON-Schema property fragments shared by the Sim tools."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping


def _frozen(fragment: Dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(fragment)


COMMON_PROPERTIES: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "address": _frozen(
            {
                "type": "string",
                "description": "Wallet or contract address (hexadecimal format)",
            }
        ),
        "chain_ids": _frozen(
            {
                "type": "array",
                "description": "List of blockchain chain IDs to filter by",
                "items": {"type": "string"},
            }
        ),
        "chain_ids_string": _frozen(
            {
                "type": "string",
                "description": "Comma-separated chain IDs or 'all' for all chains",
            }
        ),
        "limit": _frozen(
            {
                "type": "number",
                "description": "Maximum number of results to return",
                "minimum": 1,
                "maximum": 1000,
                "default": 10,
            }
        ),
        "exclude_spam": _frozen(
            {
                "type": "boolean",
                "description": "Whether to exclude spam tokens from results",
                "default": True,
            }
        ),
        "after_block_number": _frozen(
            {
                "type": "number",
                "description": "Return results after this block number",
                "minimum": 0,
            }
        ),
        "after_timestamp": _frozen(
            {
                "type": "number",
                "description": "Return results after this Unix timestamp",
                "minimum": 0,
            }
        ),
        "tx_hash": _frozen(
            {
                "type": "string",
                "description": "Filter by specific transaction hash",
            }
        ),
        "contract_address": _frozen(
            {
                "type": "string",
                "description": "Token contract address",
            }
        ),
        "mint_addresses": _frozen(
            {
                "type": "array",
                "description": "List of Solana token mint addresses",
                "items": {"type": "string"},
            }
        ),
        "offset": _frozen(
            {
                "type": "string",
                "description": "Pagination offset from previous response",
            }
        ),
    }
)


def prop(name: str, **overrides: Any) -> Dict[str, Any]:
    """Return a mutable copy of a catalog fragment, optionally overriding keys."""
    fragment = dict(COMMON_PROPERTIES[name])
    fragment.update(overrides)
    return fragment
