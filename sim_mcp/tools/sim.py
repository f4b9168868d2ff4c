"""Sim API tools (EVM and SVM)."""

from __future__ import annotations

from typing import Any, Dict, List

from sim_mcp.sim_api import SimApiClient, default_client
from sim_mcp.tools.definition import ToolDescriptor, define_api_tool
from sim_mcp.tools.descriptions import TOOL_DESCRIPTIONS
from sim_mcp.tools.envelope import invoke_and_envelope
from sim_mcp.tools.properties import prop


EVM = TOOL_DESCRIPTIONS["evm"]
SVM = TOOL_DESCRIPTIONS["svm"]


def build_sim_tools(client: SimApiClient = default_client) -> List[ToolDescriptor]:
    """
    Build the Sim tool descriptors bound to ``client``, in registry order.

    Args:
        client: Sim API client (override for testing).
    """

    async def get_balances(args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "getBalances",
            client.get_balances(
                args["address"],
                chain_ids=args.get("chain_ids"),
                exclude_spam_tokens=args.get("exclude_spam_tokens"),
            ),
        )

    async def get_evm_transactions(args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "getEVMTransactions",
            client.get_evm_transactions(
                args["address"],
                chain_ids=args.get("chain_ids"),
                limit=args.get("limit"),
                after_block_number=args.get("after_block_number"),
                after_timestamp=args.get("after_timestamp"),
                tx_hash=args.get("tx_hash"),
            ),
        )

    async def get_token_price(args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "getTokenPrice",
            client.get_token_price(
                args["contract_address"],
                chain_ids=args.get("chain_ids") or "all",
            ),
        )

    async def list_supported_chains_transactions(_args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "listSupportedChainsTransactions",
            client.list_supported_chains_transactions(),
        )

    async def list_supported_chains_token_balances(_args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "listSupportedChainsTokenBalances",
            client.list_supported_chains_token_balances(),
        )

    async def get_svm_balances(args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "getSVMBalances",
            client.get_svm_balances(
                args["address"],
                chains=args.get("chains"),
                limit=args.get("limit"),
                offset=args.get("offset"),
            ),
        )

    async def get_svm_transactions(args: Dict[str, Any]) -> Dict[str, Any]:
        return await invoke_and_envelope(
            "getSVMTransactions",
            client.get_svm_transactions(
                args["address"],
                limit=args.get("limit"),
                offset=args.get("offset"),
            ),
        )

    return [
        define_api_tool(
            "getBalances",
            get_balances,
            {
                "address": prop("address"),
                "chain_ids": prop("chain_ids_string"),
                "exclude_spam_tokens": prop("exclude_spam"),
            },
            ["address"],
            **EVM["getBalances"],
        ),
        define_api_tool(
            "getEVMTransactions",
            get_evm_transactions,
            {
                "address": prop("address"),
                "chain_ids": prop("chain_ids_string"),
                "limit": prop("limit"),
                "after_block_number": prop("after_block_number"),
                "after_timestamp": prop("after_timestamp"),
                "tx_hash": prop("tx_hash"),
            },
            ["address"],
            **EVM["getEVMTransactions"],
        ),
        define_api_tool(
            "getTokenPrice",
            get_token_price,
            {
                "contract_address": prop("contract_address"),
                "chain_ids": prop("chain_ids_string"),
            },
            ["contract_address"],
            **EVM["getTokenPrice"],
        ),
        define_api_tool(
            "listSupportedChainsTransactions",
            list_supported_chains_transactions,
            {},
            [],
            idempotent_hint=True,
            **EVM["listSupportedChainsTransactions"],
        ),
        define_api_tool(
            "listSupportedChainsTokenBalances",
            list_supported_chains_token_balances,
            {},
            [],
            idempotent_hint=True,
            **EVM["listSupportedChainsTokenBalances"],
        ),
        define_api_tool(
            "getSVMBalances",
            get_svm_balances,
            {
                "address": prop("address", description="Solana wallet address to check balances for"),
                "chains": {
                    "type": "string",
                    "description": "Comma-separated list of chains to include, or 'all' for all supported chains",
                },
                "limit": prop("limit"),
                "offset": prop("offset"),
            },
            ["address"],
            **SVM["getSVMBalances"],
        ),
        define_api_tool(
            "getSVMTransactions",
            get_svm_transactions,
            {
                "address": prop("address", description="Solana wallet address to check transactions for"),
                "limit": prop("limit"),
                "offset": prop("offset"),
            },
            ["address"],
            **SVM["getSVMTransactions"],
        ),
    ]
