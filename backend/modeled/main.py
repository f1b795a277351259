"""Main FastAPI application"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path

from modeled import __version__
from modeled.api import config as config_api
from modeled.api import editor as editor_api
from modeled.api import models as models_api
from modeled.services.model_registry import get_model_registry
from modeled.services.models_store import get_models_store
from modeled.utils.config_loader import get_config
from modeled.utils.logger import setup_logger

STATIC_DIR = Path(__file__).parent / "static"

# Initialize configuration and logging
config = get_config()
logger = setup_logger(
    log_level=config.app.log_level,
    log_file=config.app.log_file
)

# Create FastAPI app
app = FastAPI(
    title="Model Editor",
    description="Editor and storage backend for the language-model catalog",
    version=__version__
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.on_event("startup")
async def startup_event():
    """Load the catalog into the model registry"""
    logger.info("Model editor starting...")
    logger.info(f"Catalog file: {config.storage.models_file}")
    logger.info(f"Editor backend: {config.editor.backend_url}")

    store = get_models_store()
    try:
        get_model_registry().load(await store.read())
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load catalog from {store.path}: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Model editor shutting down...")


app.include_router(models_api.router, prefix="/api", tags=["models"])
app.include_router(config_api.router, prefix="/api", tags=["config"])
app.include_router(editor_api.router, tags=["editor"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "modeled.main:app",
        host=config.app.host,
        port=config.app.port,
        reload=True
    )
