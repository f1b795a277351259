"""Configuration and health check API endpoints"""

from fastapi import APIRouter
from pathlib import Path
from typing import Dict, Any

from modeled.services.editor_session import get_editor_session
from modeled.services.model_registry import get_model_registry
from modeled.utils.config_loader import get_config
from modeled.utils.logger import get_logger
from modeled import __version__

logger = get_logger()
router = APIRouter()


@router.get("/config")
async def get_configuration() -> Dict[str, Any]:
    """Get current service configuration"""
    config = get_config()
    editor = config.editor

    return {
        "storage": config.storage.model_dump(),
        "editor": {
            "backend_url": editor.backend_url,
            "load_path": editor.load_path,
            "save_path": editor.save_path,
            "notification_seconds": editor.notification_seconds
        }
    }


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint"""
    config = get_config()
    models_file = Path(config.storage.models_file)

    backend_reachable = await get_editor_session().gateway.health_check()
    registry = get_model_registry()

    status = "healthy" if (models_file.exists() and backend_reachable) else "degraded"

    return {
        "status": status,
        "models_file_present": models_file.exists(),
        "backend_reachable": backend_reachable,
        "registry_models": len(registry.models),
        "version": __version__
    }
