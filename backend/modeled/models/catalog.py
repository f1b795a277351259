"""Model catalog document models"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Literal


# The three curated subsets of model names
DefaultListName = Literal["default_models", "narrator_models", "default_vision_models"]
DEFAULT_LISTS = ("default_models", "narrator_models", "default_vision_models")

# Every field the editor can reorder by dragging
ReorderField = Literal[
    "models", "providers_order", "default_models", "narrator_models", "default_vision_models"
]

# Documents carrying current_version (and is_llama on models) are the later
# schema variant; older catalogs have neither field.
SchemaVariant = Literal["versioned", "legacy"]


class ProviderBinding(BaseModel):
    """Provider-specific identifiers for one model"""
    model_config = ConfigDict(extra="allow")

    # Written as null by backends that serialize an empty slice that way
    codenames: Optional[List[str]] = Field(default_factory=list)


class Model(BaseModel):
    """One language-model definition"""
    model_config = ConfigDict(extra="allow")

    name: str = ""
    command: str = ""
    vision: bool = False
    reasoning: bool = False
    is_llama: Optional[bool] = None  # versioned schema only
    is_markov: bool = False
    is_eliza: bool = False
    limited: bool = False  # disables custom inference settings
    encoding: Optional[str] = None
    providers: Dict[str, ProviderBinding] = Field(default_factory=dict)

    @property
    def provider_names(self) -> List[str]:
        return list(self.providers.keys())

    @property
    def tags(self) -> List[str]:
        """Capability labels shown on the model card"""
        flags = [
            (self.vision, "Vision"),
            (self.reasoning, "Reasoning"),
            (self.is_llama, "Llama"),
            (self.is_markov, "Markov"),
            (self.is_eliza, "Eliza"),
            (self.limited, "Limited"),
        ]
        return [label for enabled, label in flags if enabled]


class ModelRef(BaseModel):
    """Result of resolving a default-list entry against the catalog.

    Default lists reference models by name only. A name without a matching
    model is a dangling reference: it is kept and shown, just without details.
    """
    name: str
    model: Optional[Model] = None

    @property
    def dangling(self) -> bool:
        return self.model is None


class Configuration(BaseModel):
    """Root catalog document, replaced wholesale on every load.

    Any field may be absent (or null) in a persisted document. Serialization
    only emits the fields that were present on load or assigned since, so an
    unedited document round-trips unchanged; mutators therefore always assign
    new lists instead of mutating them in place.
    """
    model_config = ConfigDict(extra="allow")

    current_version: Optional[int] = None
    models: Optional[List[Model]] = None
    default_models: Optional[List[str]] = None
    narrator_models: Optional[List[str]] = None
    default_vision_models: Optional[List[str]] = None
    providers_order: Optional[List[str]] = None

    @property
    def schema_variant(self) -> SchemaVariant:
        return "versioned" if self.current_version is not None else "legacy"

    def model_list(self) -> List[Model]:
        return list(self.models or [])

    def name_list(self, field: str) -> List[str]:
        """Copy of a name list field, absent treated as empty"""
        return list(getattr(self, field) or [])

    def find_model(self, name: str) -> Optional[Model]:
        for model in self.models or []:
            if model.name == name:
                return model
        return None

    def resolve(self, name: str) -> ModelRef:
        return ModelRef(name=name, model=self.find_model(name))

    def resolve_list(self, field: DefaultListName) -> List[ModelRef]:
        return [self.resolve(name) for name in self.name_list(field)]

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready document with only the fields that were present or edited"""
        return self.model_dump(mode="json", exclude_unset=True)
