"""FastAPI application exposing the Sim tools over MCP's JSON-RPC HTTP transport."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from sim_mcp import __version__
from sim_mcp.config import SimConfig, default_config
from sim_mcp.mcp import DispatchError, InvalidArgumentsError, ToolDispatcher
from sim_mcp.metrics import MetricsRecorder, default_metrics
from sim_mcp.registry import ToolRegistry, build_default_registry
from sim_mcp.sessions import SessionStore
from sim_mcp.sim_api import SimApiClient, default_client
from sim_mcp.tools.envelope import is_error_result

logger = logging.getLogger(__name__)

HEALTH_STATUS = {"status": "ok"}
APP_VERSION = __version__
MCP_SERVER_NAME = "sim-api-mcp-server"
MCP_SERVER_VERSION = APP_VERSION
SESSION_HEADER = "Mcp-Session-Id"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "session_id", "error"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: SimConfig = default_config) -> None:
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    if config.log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)


def _log_tool_result(
    metrics: MetricsRecorder,
    tool_name: str,
    result: Any,
    request_id: Optional[str] = None,
) -> None:
    if not isinstance(result, dict) or is_error_result(result):
        error_text = None
        if isinstance(result, dict):
            content = result.get("content") or [{}]
            error_text = content[0].get("text")
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            error_text,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": error_text},
        )
        metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        metrics.record_tool(tool_name, success=True)


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(
    rpc_id: Any, code: int, message: str, data: Any = None
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": rpc_id, "error": error}


router = APIRouter()


@router.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@router.get("/metrics")
async def metrics(request: Request) -> JSONResponse:
    """Return in-process metrics snapshot."""
    snapshot = request.app.state.metrics.snapshot()
    snapshot["active_sessions"] = len(request.app.state.sessions)
    return JSONResponse(content=snapshot)


@router.post("/mcp")
@router.post("/mcp/sse")
async def mcp_gateway(request: Request) -> Response:
    """
    JSON-RPC gateway for MCP clients.

    Supported methods:
      - initialize
      - ping
      - notifications/initialized
      - tools/list (alias list_tools)
      - tools/call (alias call_tool)
    """
    state = request.app.state
    dispatcher: ToolDispatcher = state.dispatcher
    sessions: SessionStore = state.sessions
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()
    session_id = request.headers.get(SESSION_HEADER)

    def _respond(
        payload: Optional[Dict[str, Any]],
        status_code: int = 200,
        *,
        outcome: str,
        method_label: Optional[str] = None,
        tool_label: Optional[str] = None,
        error_code: Optional[int] = None,
        session: Optional[str] = None,
    ) -> Response:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id") if payload else None,
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        headers = {SESSION_HEADER: session} if session else None
        if payload is None:
            return Response(status_code=status_code, headers=headers)
        return JSONResponse(status_code=status_code, content=payload, headers=headers)

    try:
        body = await request.json()
    except ValueError:
        payload = _jsonrpc_error_payload(None, -32700, "Parse error")
        return _respond(payload, status_code=400, outcome="error", error_code=-32700)

    if not isinstance(body, dict):
        payload = _jsonrpc_error_payload(None, -32600, "Invalid request")
        return _respond(payload, status_code=400, outcome="error", error_code=-32600)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
        return _respond(payload, outcome="error", method_label=method, error_code=-32602)

    if not method or not isinstance(method, str):
        payload = _jsonrpc_error_payload(rpc_id, -32600, "Invalid request")
        return _respond(payload, outcome="error", error_code=-32600)

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)

        client_info = params.get("clientInfo")
        sessions.evict_idle()
        reused = bool(session_id) and session_id in sessions
        session = sessions.create(
            session_id,
            protocol_version=protocol_version,
            client_info=client_info if isinstance(client_info, dict) else {},
        )
        if not reused:
            state.metrics.record_session(opened=True)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return _respond(
            _jsonrpc_success_payload(rpc_id, result),
            outcome="success",
            method_label=method,
            session=session.session_id,
        )

    session = sessions.get(session_id)
    if session_id and session is None:
        logger.warning(
            "mcp unknown session=%s method=%s",
            session_id,
            method,
            extra={"request_id": request_id, "session_id": session_id},
        )
        payload = _jsonrpc_error_payload(rpc_id, -32001, "Session not found")
        return _respond(payload, status_code=404, outcome="error", method_label=method, error_code=-32001)
    active_session = session.session_id if session else None

    if method in ("notifications/initialized", "initialized"):
        if session is not None:
            session.initialized = True
        # Notifications do not get a JSON-RPC response body.
        return _respond(None, status_code=204, outcome="success", method_label=method, session=active_session)

    if method == "ping":
        return _respond(
            _jsonrpc_success_payload(rpc_id, {}),
            outcome="success",
            method_label=method,
            session=active_session,
        )

    if method in ("list_tools", "tools/list"):
        result = {"tools": dispatcher.list_tools()}
        return _respond(
            _jsonrpc_success_payload(rpc_id, result),
            outcome="success",
            method_label=method,
            session=active_session,
        )

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("name") or params.get("tool")
        tool_args = params.get("arguments")
        if tool_args is None:
            tool_args = params.get("params") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602, session=active_session)
        if not isinstance(tool_args, dict):
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(
                payload,
                outcome="error",
                method_label=method,
                tool_label=tool_name,
                error_code=-32602,
                session=active_session,
            )

        try:
            result = await dispatcher.call_tool(tool_name, tool_args)
        except InvalidArgumentsError as exc:
            payload = _jsonrpc_error_payload(rpc_id, exc.code, str(exc), data=exc.errors)
            return _respond(
                payload,
                outcome="error",
                method_label=method,
                tool_label=tool_name,
                error_code=exc.code,
                session=active_session,
            )
        except DispatchError as exc:
            payload = _jsonrpc_error_payload(rpc_id, exc.code, str(exc))
            return _respond(
                payload,
                outcome="error",
                method_label=method,
                tool_label=tool_name,
                error_code=exc.code,
                session=active_session,
            )

        _log_tool_result(state.metrics, tool_name, result, request_id)
        return _respond(
            _jsonrpc_success_payload(rpc_id, result),
            outcome="success",
            method_label=method,
            tool_label=tool_name,
            session=active_session,
        )

    payload = _jsonrpc_error_payload(rpc_id, -32601, "Method not found")
    return _respond(payload, outcome="error", method_label=method, error_code=-32601, session=active_session)


@router.delete("/mcp")
@router.delete("/mcp/sse")
async def mcp_close_session(request: Request) -> Response:
    """Terminate a session created by ``initialize``."""
    session_id = request.headers.get(SESSION_HEADER)
    if not session_id:
        return JSONResponse(
            status_code=400,
            content=_jsonrpc_error_payload(None, -32000, "Missing Mcp-Session-Id header"),
        )
    if not request.app.state.sessions.close(session_id):
        return JSONResponse(
            status_code=404,
            content=_jsonrpc_error_payload(None, -32001, "Session not found"),
        )
    request.app.state.metrics.record_session(opened=False)
    return Response(status_code=200)


@router.get("/mcp")
@router.get("/mcp/sse")
async def mcp_stream_not_supported() -> JSONResponse:
    """Server-initiated streams are not offered; every reply rides on the POST."""
    return JSONResponse(
        status_code=405,
        content=_jsonrpc_error_payload(None, -32000, "Method not allowed"),
        headers={"Allow": "POST, DELETE"},
    )


def create_app(
    config: SimConfig = default_config,
    *,
    client: Optional[SimApiClient] = None,
    registry: Optional[ToolRegistry] = None,
    sessions: Optional[SessionStore] = None,
    metrics_recorder: MetricsRecorder = default_metrics,
) -> FastAPI:
    """
    Build the FastAPI app with its own dispatcher and session store.

    Args:
        config: Runtime configuration (used when ``client`` is not supplied).
        client: Sim API client shared by every tool.
        registry: Tool registry; defaults to all Sim tools bound to ``client``.
        sessions: Session store for the MCP endpoint.
        metrics_recorder: In-process metrics sink.
    """
    api_client = client or (default_client if config is default_config else SimApiClient(config))
    dispatcher = ToolDispatcher(registry or build_default_registry(api_client))
    dispatcher.register_all()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await api_client.aclose()

    application = FastAPI(
        title="Sim API MCP Server",
        description="Read-only Sim blockchain-data tool surface for LLM agents.",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    application.state.config = config
    application.state.client = api_client
    application.state.dispatcher = dispatcher
    application.state.sessions = (
        sessions if sessions is not None else SessionStore(config.session_idle_timeout)
    )
    application.state.metrics = metrics_recorder

    @application.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        metrics_recorder.incr_request()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        metrics_recorder.record_duration(request_id, duration_ms)
        response.headers["X-Request-ID"] = request_id
        return response

    application.include_router(router)
    return application


configure_logging(default_config)
app = create_app()

# Run with: uvicorn sim_mcp.server:app --reload
