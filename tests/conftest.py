import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from sim_mcp.config import SimConfig  # noqa: E402
from sim_mcp.metrics import default_metrics  # noqa: E402


class MockResponse:
    def __init__(self, status_code: int, json_body=None, *, text: str | None = None):
        self.status_code = status_code
        self._json = json_body
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("not json")
        return self._json


class CaptureClient:
    """Stands in for httpx.AsyncClient and records every GET."""

    def __init__(self, responses=None, *, default_body=None):
        self.responses = list(responses or [])
        self.default_body = {} if default_body is None else default_body
        self.calls = []

    async def get(self, path, params=None, headers=None):
        self.calls.append({"path": path, "params": params, "headers": headers})
        if self.responses:
            return self.responses.pop(0)
        return MockResponse(200, self.default_body)

    async def aclose(self):
        return None


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def config():
    return SimConfig(base_url="https://sim.test", api_key="test-key", timeout=2.0)


@pytest.fixture
def capture():
    return CaptureClient()


@pytest.fixture
def capture_client_cls():
    return CaptureClient


@pytest.fixture
def mock_response_cls():
    return MockResponse
