"""Catalog file storage and server-side validation"""

import json
from pathlib import Path
from typing import Optional

import aiofiles

from modeled.models.catalog import Configuration
from modeled.services.errors import CatalogValidationError
from modeled.utils.config_loader import get_config
from modeled.utils.logger import get_logger

logger = get_logger()


def validate_catalog(config: Configuration) -> None:
    """Check a catalog before it is persisted.

    Stricter than the editor: dangling default-list names and non-vision
    models on the vision list are rejected here.
    """
    models = config.model_list()
    if not models:
        raise CatalogValidationError("at least one model must be defined")

    names = set()
    for model in models:
        if model.name in names:
            raise CatalogValidationError(f"duplicate model name: {model.name}")
        names.add(model.name)

    for name in config.name_list("default_models"):
        if name not in names:
            raise CatalogValidationError(f"default model not found: {name}")

    for name in config.name_list("narrator_models"):
        if name not in names:
            raise CatalogValidationError(f"narrator model not found: {name}")

    for name in config.name_list("default_vision_models"):
        model = config.find_model(name)
        if model is None:
            raise CatalogValidationError(f"vision model not found: {name}")
        if not model.vision:
            raise CatalogValidationError(f"vision model {name} does not have vision capability")


def load_catalog_file(path: str) -> Configuration:
    """Read and parse a catalog file synchronously (CLI use)"""
    with open(path, 'r', encoding='utf-8') as f:
        return Configuration.model_validate(json.load(f))


class ModelsStore:
    """Reads and writes the catalog JSON file"""

    def __init__(self, models_file: str = "models.json", indent: int = 2):
        self.path = Path(models_file)
        self.indent = indent

    async def read_raw(self) -> bytes:
        """Raw file contents, served as-is"""
        async with aiofiles.open(self.path, 'rb') as f:
            return await f.read()

    async def read(self) -> Configuration:
        return Configuration.model_validate_json(await self.read_raw())

    async def write(self, config: Configuration) -> None:
        """Persist the document as indented JSON"""
        data = json.dumps(config.to_document(), indent=self.indent, ensure_ascii=False)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, 'w', encoding='utf-8') as f:
            await f.write(data)

        logger.info(f"Wrote {len(config.model_list())} models to {self.path}")


# Global instance
_models_store: Optional[ModelsStore] = None


def get_models_store() -> ModelsStore:
    """Get the global catalog store instance"""
    global _models_store
    if _models_store is None:
        storage = get_config().storage
        _models_store = ModelsStore(storage.models_file, storage.indent)
    return _models_store


def set_models_store(store: Optional[ModelsStore]) -> None:
    """Replace the global store (None recreates it from config)"""
    global _models_store
    _models_store = store
