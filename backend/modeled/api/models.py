"""Catalog storage endpoints read and written by the editor"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from modeled.models.catalog import Configuration
from modeled.services.errors import CatalogValidationError
from modeled.services.model_registry import get_model_registry
from modeled.services.models_store import get_models_store, validate_catalog
from modeled.utils.logger import get_logger

logger = get_logger()
router = APIRouter()


@router.get("/models")
async def get_models() -> Response:
    """Serve the catalog file exactly as stored"""
    store = get_models_store()
    try:
        data = await store.read_raw()
    except OSError as e:
        logger.error(f"Error reading models file {store.path}: {e}")
        return PlainTextResponse(f"Error reading models file: {e}", status_code=500)

    return Response(content=data, media_type="application/json")


@router.post("/models/save")
async def save_models(request: Request):
    """Validate and persist a full catalog document, then reload the registry.

    Errors are answered as plain text so the editor can show them verbatim.
    """
    body = await request.body()
    try:
        config = Configuration.model_validate_json(body)
    except ValidationError as e:
        return PlainTextResponse(f"Error decoding JSON: {e}", status_code=400)

    try:
        validate_catalog(config)
    except CatalogValidationError as e:
        logger.warning(f"Rejected catalog save: {e}")
        return PlainTextResponse(f"Invalid configuration: {e}", status_code=400)

    store = get_models_store()
    try:
        await store.write(config)
    except OSError as e:
        logger.error(f"Error writing models file {store.path}: {e}")
        return PlainTextResponse(f"Error writing file: {e}", status_code=500)

    try:
        get_model_registry().load(await store.read())
    except (OSError, ValidationError) as e:
        logger.error(f"Error reloading models: {e}")
        return PlainTextResponse(f"Error reloading models: {e}", status_code=500)

    return {"status": "success"}
