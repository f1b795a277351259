"""Editor page and session endpoints"""

from fastapi import APIRouter, Body
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import ValidationError
from typing import Dict, Any

from modeled.models.editor import ActionResult, parse_action
from modeled.services.editor_session import get_editor_session
from modeled.utils.logger import get_logger

logger = get_logger()
router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def editor_page() -> str:
    """Render the editor from the current session state"""
    return get_editor_session().render_page()


@router.post("/editor/load", response_model=ActionResult)
async def load_configuration() -> ActionResult:
    """Replace the session document with the backend's copy"""
    return await get_editor_session().load()


@router.post("/editor/save", response_model=ActionResult)
async def save_configuration() -> ActionResult:
    """Submit the whole session document to the backend"""
    return await get_editor_session().save()


@router.post("/editor/actions", response_model=ActionResult)
async def apply_action(payload: Dict[str, Any] = Body(...)):
    """Apply one UI action to the session"""
    try:
        action = parse_action(payload)
    except ValidationError as e:
        logger.warning(f"Malformed editor action: {e}")
        return PlainTextResponse(f"Malformed action: {e}", status_code=422)

    return get_editor_session().dispatch(action)


@router.get("/editor/state")
async def session_state() -> Dict[str, Any]:
    """Current in-memory document and transient state"""
    session = get_editor_session()
    return {
        "loaded": session.config is not None,
        "schema_variant": session.config.schema_variant if session.config else None,
        "editing_index": session.editing_index,
        "model_form_open": session.model_form_open,
        "modal": session.modal.model_dump() if session.modal else None,
        "config": session.config.to_document() if session.config else None,
    }
