"""
Shared pytest fixtures for the model editor tests.

Provides a sample catalog document, an in-memory fake of the catalog
endpoints and an editor session wired to it.
"""

import asyncio
import copy
import json
import pytest
import httpx
from typing import Dict, Any, List

from modeled.services.config_gateway import ConfigGateway
from modeled.services.editor_session import EditorSession


SAMPLE_DOCUMENT: Dict[str, Any] = {
    "models": [
        {"name": "GPT", "command": "gpt", "vision": True, "providers": {}}
    ],
    "providers_order": ["openrouter"],
    "default_models": [],
    "narrator_models": [],
    "default_vision_models": [],
    "current_version": 3,
}


class FakeBackend:
    """Stands in for GET /api/models and POST /api/models/save"""

    def __init__(self, document: Dict[str, Any]):
        self.document = document
        self.saved: List[Dict[str, Any]] = []
        self.load_status = 200
        self.save_status = 200
        self.save_error = "Invalid configuration: duplicate model name: GPT"
        self.unreachable = False

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)

        if request.method == "GET" and request.url.path == "/api/models":
            if self.load_status != 200:
                return httpx.Response(self.load_status, text="backend exploded")
            return httpx.Response(200, json=self.document)

        if request.method == "POST" and request.url.path == "/api/models/save":
            self.saved.append(json.loads(request.content))
            if self.save_status != 200:
                return httpx.Response(self.save_status, text=self.save_error)
            return httpx.Response(200, json={"status": "success"})

        return httpx.Response(404, text="Not Found")


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def backend(sample_document) -> FakeBackend:
    return FakeBackend(sample_document)


@pytest.fixture
def gateway(backend) -> ConfigGateway:
    return ConfigGateway("http://backend.test", transport=httpx.MockTransport(backend.handle))


@pytest.fixture
def empty_session(gateway) -> EditorSession:
    """Session before any load"""
    return EditorSession(gateway)


@pytest.fixture
def session(empty_session) -> EditorSession:
    """Session with the sample document loaded"""
    asyncio.run(empty_session.load())
    return empty_session


@pytest.fixture
def config_file(tmp_path):
    """Minimal service config.toml pointing at tmp_path"""
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
[app]
port = 7000
log_level = "DEBUG"
log_file = "{(tmp_path / 'logs' / 'app.log').as_posix()}"

[storage]
models_file = "{(tmp_path / 'models.json').as_posix()}"

[editor]
backend_url = "http://backend.test"
notification_seconds = 3
""".strip(),
        encoding="utf-8",
    )
    return path
