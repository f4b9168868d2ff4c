"""Minimal sanity checks for the Sim MCP tools against the live API."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from sim_mcp.mcp import ToolDispatcher  # noqa: E402
from sim_mcp.registry import build_default_registry  # noqa: E402
from sim_mcp.sim_api import default_client  # noqa: E402

# Public, well-known wallets; override via env.
SAMPLE_EVM_ADDRESS = os.getenv("SIM_SAMPLE_EVM_ADDRESS", "0xd8da6bf26964af9d7eed9e03e53415d37aa96045")
SAMPLE_SVM_ADDRESS = os.getenv("SIM_SAMPLE_SVM_ADDRESS", "DYw8jCTfwHNRJhhmFcbXvVDTqWMEVFBX6ZKUmG5CNSKK")
# USDC on Ethereum mainnet.
SAMPLE_TOKEN = os.getenv("SIM_SAMPLE_TOKEN", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")

CALLS = [
    ("listSupportedChainsTransactions", {}),
    ("listSupportedChainsTokenBalances", {}),
    ("getBalances", {"address": SAMPLE_EVM_ADDRESS, "chain_ids": "1"}),
    ("getEVMTransactions", {"address": SAMPLE_EVM_ADDRESS, "limit": 2}),
    ("getTokenPrice", {"contract_address": SAMPLE_TOKEN, "chain_ids": "1"}),
    ("getSVMBalances", {"address": SAMPLE_SVM_ADDRESS, "limit": 2}),
    ("getSVMTransactions", {"address": SAMPLE_SVM_ADDRESS, "limit": 2}),
]


async def main() -> None:
    dispatcher = ToolDispatcher(build_default_registry(default_client))
    dispatcher.register_all()
    try:
        for name, arguments in CALLS:
            result = await dispatcher.call_tool(name, arguments)
            status = "ERROR" if result.get("isError") else "ok"
            print(f"{name} [{status}]:", result["content"][0]["text"][:400])
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
