"""In-process view of the persisted catalog.

Refreshed from the catalog file at startup and after every successful save,
so the rest of the process sees the same models the editor wrote.
"""

from typing import Optional, List, Dict

from modeled.models.catalog import Configuration, Model
from modeled.utils.logger import get_logger

logger = get_logger()


class ModelRegistry:
    """Lookup tables built from one catalog document"""

    def __init__(self):
        self.models: List[Model] = []
        self.default_models: List[str] = []
        self.narrator_models: List[str] = []
        self.default_vision_models: List[str] = []
        self.providers_order: List[str] = []
        self._by_name: Dict[str, Model] = {}

    def load(self, config: Configuration) -> None:
        self.models = config.model_list()
        self.default_models = config.name_list("default_models")
        self.narrator_models = config.name_list("narrator_models")
        self.default_vision_models = config.name_list("default_vision_models")

        # An empty order keeps whatever priority was known before
        providers_order = config.name_list("providers_order")
        if providers_order:
            self.providers_order = providers_order

        self._by_name = {model.name: model for model in self.models}
        logger.info(f"Model registry loaded {len(self.models)} models")

    @property
    def default_model(self) -> Optional[str]:
        return self.default_models[0] if self.default_models else None

    def get(self, name: str) -> Optional[Model]:
        """Model by name, falling back to the default model"""
        model = self._by_name.get(name)
        if model is not None:
            return model
        if self.default_model is not None:
            return self._by_name.get(self.default_model)
        return None

    def get_many(self, names: List[str]) -> List[Optional[Model]]:
        return [self.get(name) for name in names]


# Global instance
_registry: Optional[ModelRegistry] = None


def get_model_registry() -> ModelRegistry:
    """Get the global model registry"""
    global _registry
    if _registry is None:
        _registry = ModelRegistry()
    return _registry
