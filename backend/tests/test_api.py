"""Tests for the catalog endpoints and the editor endpoints together."""

import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from modeled.api import editor as editor_api
from modeled.api import models as models_api
from modeled.services.config_gateway import ConfigGateway
from modeled.services.editor_session import EditorSession, set_editor_session
from modeled.services.model_registry import get_model_registry
from modeled.services.models_store import ModelsStore, set_models_store


@pytest.fixture
def models_file(tmp_path, sample_document):
    path = tmp_path / "models.json"
    path.write_text(json.dumps(sample_document, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def app(models_file):
    app = FastAPI()
    app.include_router(models_api.router, prefix="/api")
    app.include_router(editor_api.router)

    set_models_store(ModelsStore(str(models_file)))
    # The editor reaches the catalog endpoints of this same app
    gateway = ConfigGateway("http://testserver", transport=httpx.ASGITransport(app=app))
    set_editor_session(EditorSession(gateway))

    yield app

    set_models_store(None)
    set_editor_session(None)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_get_models_serves_file_verbatim(client, models_file):
    response = client.get("/api/models")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.content == models_file.read_bytes()


def test_get_models_missing_file(client, models_file):
    models_file.unlink()

    response = client.get("/api/models")

    assert response.status_code == 500
    assert response.text.startswith("Error reading models file:")


def test_save_models_writes_and_reloads(client, models_file, sample_document):
    sample_document["models"].append({"name": "Llama", "command": "llama", "is_llama": True})
    sample_document["narrator_models"] = ["Llama"]

    response = client.post("/api/models/save", json=sample_document)

    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    assert json.loads(models_file.read_text(encoding="utf-8")) == sample_document

    registry = get_model_registry()
    assert registry.narrator_models == ["Llama"]
    assert registry.get("Llama").command == "llama"


def test_save_models_bad_json(client):
    response = client.post(
        "/api/models/save",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.text.startswith("Error decoding JSON:")


@pytest.mark.parametrize("mutate,message", [
    (lambda d: d.update(models=[]), "at least one model must be defined"),
    (lambda d: d["models"].append({"name": "GPT", "command": "gpt2"}), "duplicate model name: GPT"),
    (lambda d: d.update(default_models=["Nope"]), "default model not found: Nope"),
    (lambda d: d.update(narrator_models=["Nope"]), "narrator model not found: Nope"),
    (lambda d: d.update(default_vision_models=["Nope"]), "vision model not found: Nope"),
])
def test_save_models_validation(client, models_file, sample_document, mutate, message):
    original = models_file.read_bytes()
    mutate(sample_document)

    response = client.post("/api/models/save", json=sample_document)

    assert response.status_code == 400
    assert response.text == f"Invalid configuration: {message}"
    assert models_file.read_bytes() == original


def test_save_models_rejects_non_vision_model_on_vision_list(client, sample_document):
    sample_document["models"].append({"name": "Text", "command": "text"})
    sample_document["default_vision_models"] = ["Text"]

    response = client.post("/api/models/save", json=sample_document)

    assert response.status_code == 400
    assert response.text == "Invalid configuration: vision model Text does not have vision capability"


def test_editor_page_before_load(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "No models configured" in response.text
    assert "/static/editor.js" in response.text


def test_editor_edit_and_save_cycle(client, models_file):
    loaded = client.post("/editor/load").json()
    assert loaded["notification"]["message"] == "Configuration loaded successfully"
    assert "GPT" in loaded["sections"]["models-list"]

    client.post("/editor/actions", json={"type": "open_add_provider"})
    added = client.post("/editor/actions", json={"type": "submit_add_provider", "name": "local"}).json()
    assert "local" in added["sections"]["providers-list"]

    client.post("/editor/actions", json={"type": "open_edit_version"})
    client.post("/editor/actions", json={"type": "submit_edit_version", "value": "4"})

    saved = client.post("/editor/save").json()
    assert saved["notification"]["level"] == "success"

    stored = json.loads(models_file.read_text(encoding="utf-8"))
    assert stored["providers_order"] == ["openrouter", "local"]
    assert stored["current_version"] == 4


def test_editor_save_surfaces_backend_rejection(client, models_file):
    client.post("/editor/load")
    client.post("/editor/actions", json={
        "type": "submit_add_to_list", "target": "default_models", "model_name": "GPT",
    })
    client.post("/editor/actions", json={"type": "open_model_form", "index": 0})
    client.post("/editor/actions", json={"type": "delete_model", "confirmed": True})
    before = models_file.read_bytes()

    result = client.post("/editor/save").json()

    assert result["notification"]["level"] == "error"
    assert result["notification"]["message"] == (
        "Error saving configuration: Invalid configuration: at least one model must be defined"
    )
    assert models_file.read_bytes() == before

    state = client.get("/editor/state").json()
    assert state["config"]["models"] == []
    assert state["config"]["default_models"] == ["GPT"]


def test_editor_reorder_action(client):
    client.post("/editor/load")
    client.post("/editor/actions", json={"type": "submit_add_provider", "name": "groq"})

    client.post("/editor/actions", json={
        "type": "reorder", "field": "providers_order", "order": ["groq", "openrouter"],
    })

    state = client.get("/editor/state").json()
    assert state["config"]["providers_order"] == ["groq", "openrouter"]
    assert state["schema_variant"] == "versioned"


def test_editor_malformed_action(client):
    client.post("/editor/load")

    response = client.post("/editor/actions", json={"type": "explode"})

    assert response.status_code == 422
    assert response.text.startswith("Malformed action:")
