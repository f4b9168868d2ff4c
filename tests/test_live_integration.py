import json
import os

import httpx
import pytest
import pytest_asyncio

from sim_mcp.config import SimConfig, load_api_key
from sim_mcp.sim_api.client import SimApiClient
from sim_mcp.tools import build_sim_tools


LIVE = os.getenv("SIM_LIVE_TESTS") in {"1", "true", "yes"}
SAMPLE_EVM_ADDRESS = os.getenv("SIM_SAMPLE_EVM_ADDRESS", "0xd8da6bf26964af9d7eed9e03e53415d37aa96045")
SAMPLE_SVM_ADDRESS = os.getenv("SIM_SAMPLE_SVM_ADDRESS", "DYw8jCTfwHNRJhhmFcbXvVDTqWMEVFBX6ZKUmG5CNSKK")


pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(not LIVE, reason="Live Sim API integration tests are disabled"),
]


@pytest_asyncio.fixture
async def live_tools():
    config = SimConfig(api_key=load_api_key())
    async with httpx.AsyncClient(base_url=config.base_url, timeout=config.timeout) as httpx_client:
        client = SimApiClient(config, async_client=httpx_client)
        yield {tool.name: tool for tool in build_sim_tools(client)}


@pytest.mark.asyncio
async def test_live_supported_chains(live_tools):
    result = await live_tools["listSupportedChainsTokenBalances"].callback({})
    assert "isError" not in result
    assert "chains" in json.loads(result["content"][0]["text"])


@pytest.mark.asyncio
async def test_live_evm_balances(live_tools):
    result = await live_tools["getBalances"].callback({"address": SAMPLE_EVM_ADDRESS, "chain_ids": "1"})
    assert "isError" not in result
    body = json.loads(result["content"][0]["text"])
    assert body.get("wallet_address", "").lower() == SAMPLE_EVM_ADDRESS.lower()


@pytest.mark.asyncio
async def test_live_svm_transactions(live_tools):
    result = await live_tools["getSVMTransactions"].callback({"address": SAMPLE_SVM_ADDRESS, "limit": 1})
    assert "isError" not in result
