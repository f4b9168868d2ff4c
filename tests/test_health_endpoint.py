from fastapi.testclient import TestClient

from sim_mcp.server import SESSION_HEADER, app


def test_health_reports_ok_with_request_id():
    client = TestClient(app)
    first = client.get("/health")
    second = client.get("/health")
    assert first.json() == {"status": "ok"}
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


def test_metrics_track_opened_sessions():
    client = TestClient(app)
    init = client.post(
        "/mcp",
        json={"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2025-03-26"}},
    )
    session_id = init.headers[SESSION_HEADER]
    try:
        data = client.get("/metrics").json()
        assert data["sessions_opened"] == 1
        assert data["active_sessions"] >= 1
        assert data["requests"] >= 2
    finally:
        client.delete("/mcp", headers={SESSION_HEADER: session_id})


def test_default_app_lists_all_tools():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    assert len(resp.json()["result"]["tools"]) == 7
