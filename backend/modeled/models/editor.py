"""Editor actions, forms and responses"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing import Optional, List, Dict, Literal, Union, Annotated

from modeled.models.catalog import DefaultListName, ReorderField


NotificationLevel = Literal["success", "error", "info"]
ModalKind = Literal["add_provider", "add_to_list", "edit_version"]


class ProviderRow(BaseModel):
    """One row of the repeatable provider sub-form"""
    name: str = ""
    codenames: str = ""  # comma-separated


class ModelForm(BaseModel):
    """Submitted add/edit model form; flags carry checkbox state"""
    name: str = ""
    command: str = ""
    vision: bool = False
    reasoning: bool = False
    is_llama: bool = False
    is_markov: bool = False
    is_eliza: bool = False
    limited: bool = False
    encoding: str = ""
    providers: List[ProviderRow] = Field(default_factory=list)


class OpenModelForm(BaseModel):
    type: Literal["open_model_form"] = "open_model_form"
    index: int = -1  # -1 opens a blank form for a new model


class CloseModelForm(BaseModel):
    type: Literal["close_model_form"] = "close_model_form"


class SubmitModelForm(BaseModel):
    type: Literal["submit_model_form"] = "submit_model_form"
    form: ModelForm


class DeleteModel(BaseModel):
    type: Literal["delete_model"] = "delete_model"
    confirmed: bool = False


class OpenAddProvider(BaseModel):
    type: Literal["open_add_provider"] = "open_add_provider"


class SubmitAddProvider(BaseModel):
    type: Literal["submit_add_provider"] = "submit_add_provider"
    name: str = ""


class RemoveProvider(BaseModel):
    type: Literal["remove_provider"] = "remove_provider"
    name: str


class OpenAddToList(BaseModel):
    type: Literal["open_add_to_list"] = "open_add_to_list"
    target: DefaultListName


class SubmitAddToList(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    type: Literal["submit_add_to_list"] = "submit_add_to_list"
    target: DefaultListName
    model_name: str = ""


class RemoveFromList(BaseModel):
    type: Literal["remove_from_list"] = "remove_from_list"
    target: DefaultListName
    name: str


class OpenEditVersion(BaseModel):
    type: Literal["open_edit_version"] = "open_edit_version"


class SubmitEditVersion(BaseModel):
    type: Literal["submit_edit_version"] = "submit_edit_version"
    value: str = ""  # raw input, parsed by the handler


class CloseModal(BaseModel):
    type: Literal["close_modal"] = "close_modal"


class Reorder(BaseModel):
    """Drag-end report: item identifiers in their new DOM order"""
    type: Literal["reorder"] = "reorder"
    field: ReorderField
    order: List[str]


EditorAction = Annotated[
    Union[
        OpenModelForm,
        CloseModelForm,
        SubmitModelForm,
        DeleteModel,
        OpenAddProvider,
        SubmitAddProvider,
        RemoveProvider,
        OpenAddToList,
        SubmitAddToList,
        RemoveFromList,
        OpenEditVersion,
        SubmitEditVersion,
        CloseModal,
        Reorder,
    ],
    Field(discriminator="type"),
]

action_adapter = TypeAdapter(EditorAction)


def parse_action(payload: dict) -> EditorAction:
    """Validate a raw action payload into its typed action"""
    return action_adapter.validate_python(payload)


class GuidedModal(BaseModel):
    """The single secondary modal that may be open"""
    kind: ModalKind
    target: Optional[DefaultListName] = None


class Notification(BaseModel):
    """Transient status banner"""
    message: str
    level: NotificationLevel = "info"
    ttl_seconds: int = 5


class ActionResult(BaseModel):
    """What the browser needs after an action: re-rendered sections plus
    the current model form / guided modal markup (None means closed)"""
    sections: Dict[str, str] = Field(default_factory=dict)
    model_form: Optional[str] = None
    modal: Optional[str] = None
    confirm: Optional[str] = None
    notification: Optional[Notification] = None
