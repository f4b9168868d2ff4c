import pytest

from sim_mcp.mcp import (
    DispatcherNotReadyError,
    InvalidArgumentsError,
    ToolDispatcher,
    UnknownToolError,
)
from sim_mcp.registry import ToolRegistry, build_default_registry
from sim_mcp.sim_api import SimApiClient
from sim_mcp.tools.definition import define_api_tool
from sim_mcp.tools.properties import prop


@pytest.fixture
def dispatcher(config, capture):
    d = ToolDispatcher(build_default_registry(SimApiClient(config, async_client=capture)))
    d.register_all()
    return d


def test_not_ready_before_registration(config, capture):
    d = ToolDispatcher(build_default_registry(SimApiClient(config, async_client=capture)))
    assert d.ready is False
    with pytest.raises(DispatcherNotReadyError):
        d.list_tools()


def test_register_all_is_idempotent(dispatcher):
    dispatcher.register_all()
    assert dispatcher.ready is True
    assert len(dispatcher.list_tools()) == 7


def test_list_tools_wire_shape(dispatcher):
    tools = dispatcher.list_tools()
    balances = tools[0]
    assert balances["name"] == "getBalances"
    assert balances["title"] == "Get Token Balances"
    assert balances["inputSchema"]["additionalProperties"] is False
    assert balances["inputSchema"]["required"] == ["address"]
    assert balances["annotations"]["readOnlyHint"] is True


@pytest.mark.asyncio
async def test_call_tool_validates_and_forwards(dispatcher, capture):
    result = await dispatcher.call_tool("getEVMTransactions", {"address": "0xABC", "limit": 10, "tx_hash": "0xdead"})
    assert "isError" not in result
    call = capture.calls[0]
    assert call["path"] == "/v1/evm/transactions/0xABC"
    assert list(call["params"].items()) == [("limit", "10"), ("tx_hash", "0xdead")]


@pytest.mark.asyncio
async def test_boolean_default_reaches_the_wire(dispatcher, capture):
    await dispatcher.call_tool("getBalances", {"address": "0xABC"})
    assert capture.calls[0]["params"] == {"exclude_spam_tokens": "true"}


@pytest.mark.asyncio
async def test_unknown_tool(dispatcher):
    with pytest.raises(UnknownToolError) as excinfo:
        await dispatcher.call_tool("getNothing", {})
    assert "not found" in str(excinfo.value)


@pytest.mark.asyncio
async def test_invalid_arguments(dispatcher, capture):
    with pytest.raises(InvalidArgumentsError) as excinfo:
        await dispatcher.call_tool("getBalances", {"address": "0xABC", "bogus": True})
    assert excinfo.value.errors
    with pytest.raises(InvalidArgumentsError):
        await dispatcher.call_tool("getBalances", {})
    assert capture.calls == []


@pytest.mark.asyncio
async def test_callback_exception_is_enveloped():
    async def explode(_args):
        raise KeyError("boom")

    d = ToolDispatcher(ToolRegistry([define_api_tool("explode", explode, {"address": prop("address")})]))
    d.register_all()
    result = await d.call_tool("explode", {})
    assert result["isError"] is True
    assert result["content"][0]["type"] == "text"
    assert "boom" in result["content"][0]["text"]


@pytest.mark.asyncio
async def test_malformed_envelope_is_replaced():
    async def bad(_args):
        return "plain string"

    d = ToolDispatcher(ToolRegistry([define_api_tool("bad", bad)]))
    d.register_all()
    result = await d.call_tool("bad")
    assert result["isError"] is True
