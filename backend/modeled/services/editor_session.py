"""Editor session: the in-memory catalog and the handlers that edit it.

An ``EditorSession`` owns the single live ``Configuration``, the index of the
model being edited, the one guided modal that may be open and the latest
notification. Browser events arrive as typed actions; ``dispatch`` looks up
the handler for the action type, applies the state transition and answers
with the sections that need re-rendering.
"""

import re

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Callable

from modeled.models.catalog import Configuration, Model, ProviderBinding
from modeled.models.editor import (
    ActionResult,
    CloseModal,
    CloseModelForm,
    DeleteModel,
    EditorAction,
    GuidedModal,
    ModelForm,
    Notification,
    OpenAddProvider,
    OpenAddToList,
    OpenEditVersion,
    OpenModelForm,
    RemoveFromList,
    RemoveProvider,
    Reorder,
    SubmitAddProvider,
    SubmitAddToList,
    SubmitEditVersion,
    SubmitModelForm,
)
from modeled.services import renderer
from modeled.services.config_gateway import ConfigGateway
from modeled.services.errors import FormValidationError, GatewayError
from modeled.services.reorder import apply_reorder
from modeled.utils.config_loader import get_config
from modeled.utils.logger import get_logger

logger = get_logger()


# Editing index meaning "new model" / "nothing being edited"
NEW_MODEL = -1

DELETE_CONFIRMATION = "Are you sure you want to delete this model?"


class Transition(BaseModel):
    """Outcome of one handler"""
    sections: List[str] = Field(default_factory=list)
    confirm: Optional[str] = None


def parse_codenames(text: str) -> List[str]:
    """Split a comma-separated codename field, dropping blanks"""
    return [part.strip() for part in text.split(",") if part.strip()]


def build_model(form: ModelForm) -> Model:
    """Turn a submitted form into a Model, rejecting missing name/command"""
    if not form.name.strip() or not form.command.strip():
        raise FormValidationError("Model name and command are required")

    providers: Dict[str, ProviderBinding] = {}
    for row in form.providers:
        provider_name = row.name.strip()
        if provider_name:
            providers[provider_name] = ProviderBinding(codenames=parse_codenames(row.codenames))

    fields = dict(
        name=form.name,
        command=form.command,
        vision=form.vision,
        reasoning=form.reasoning,
        is_llama=form.is_llama,
        is_markov=form.is_markov,
        is_eliza=form.is_eliza,
        limited=form.limited,
        providers=providers,
    )
    # Blank encoding means "use the default" and is left out of the document
    encoding = form.encoding.strip()
    if encoding:
        fields["encoding"] = encoding

    return Model(**fields)


class EditorSession:
    """Single-writer owner of the live catalog document"""

    def __init__(self, gateway: ConfigGateway, notification_seconds: int = 5):
        self.gateway = gateway
        self.notification_seconds = notification_seconds

        self.config: Optional[Configuration] = None
        self.editing_index: int = NEW_MODEL
        self.model_form_open: bool = False
        self.modal: Optional[GuidedModal] = None
        self.notification: Optional[Notification] = None

        self._handlers: Dict[type, Callable[..., Transition]] = {
            OpenModelForm: self._open_model_form,
            CloseModelForm: self._close_model_form,
            SubmitModelForm: self._submit_model_form,
            DeleteModel: self._delete_model,
            OpenAddProvider: self._open_add_provider,
            SubmitAddProvider: self._submit_add_provider,
            RemoveProvider: self._remove_provider,
            OpenAddToList: self._open_add_to_list,
            SubmitAddToList: self._submit_add_to_list,
            RemoveFromList: self._remove_from_list,
            OpenEditVersion: self._open_edit_version,
            SubmitEditVersion: self._submit_edit_version,
            CloseModal: self._close_modal,
            Reorder: self._reorder,
        }

    def dispatch(self, action: EditorAction) -> ActionResult:
        """Apply one action to the session and describe the re-render"""
        self.notification = None

        if self.config is None:
            self.notify("No configuration loaded", "error")
            return self._result(Transition())

        handler = self._handlers[type(action)]
        try:
            transition = handler(action)
        except FormValidationError as e:
            logger.warning(f"Rejected {action.type}: {e}")
            self.notify(str(e), "error")
            return self._result(Transition())

        logger.debug(f"Applied {action.type}, re-rendering {transition.sections}")
        return self._result(transition)

    def notify(self, message: str, level: str = "info") -> None:
        """Replace the current notification"""
        self.notification = Notification(
            message=message,
            level=level,
            ttl_seconds=self.notification_seconds
        )

    def _result(self, transition: Transition) -> ActionResult:
        return ActionResult(
            sections={
                section: renderer.render_section(section, self.config)
                for section in transition.sections
            },
            model_form=self.render_model_form(),
            modal=self.render_modal(),
            confirm=transition.confirm,
            notification=self.notification,
        )

    async def load(self) -> ActionResult:
        """Replace the live document with the backend's copy"""
        self.notification = None
        try:
            config = await self.gateway.load()
        except GatewayError as e:
            logger.error(f"Error loading configuration: {e}")
            self.notify(f"Error loading configuration: {e}", "error")
            return self._result(Transition())

        self.config = config
        self._reset_model_form()
        self.modal = None
        self.notify("Configuration loaded successfully", "success")
        return self._result(Transition(sections=renderer.ALL_SECTIONS))

    async def save(self) -> ActionResult:
        """Submit the live document; the session keeps it either way"""
        self.notification = None
        if self.config is None:
            self.notify("No configuration loaded", "error")
            return self._result(Transition())

        try:
            await self.gateway.save(self.config)
        except GatewayError as e:
            logger.error(f"Error saving configuration: {e}")
            self.notify(f"Error saving configuration: {e}", "error")
            return self._result(Transition())

        self.notify("Configuration saved successfully", "success")
        return self._result(Transition())

    @property
    def editing_model(self) -> Optional[Model]:
        if self.config is None or self.editing_index == NEW_MODEL:
            return None
        return self.config.model_list()[self.editing_index]

    def list_candidates(self, target: str) -> List[Model]:
        """Models the guided add flow may offer for a default list"""
        if self.config is None:
            return []
        present = set(self.config.name_list(target))
        candidates = [
            model for model in self.config.model_list()
            if model.name and model.name not in present
        ]
        if target == "default_vision_models":
            candidates = [model for model in candidates if model.vision]
        return candidates

    def render_model_form(self) -> Optional[str]:
        if not self.model_form_open:
            return None
        return renderer.render_model_form(
            self.editing_model,
            editing=self.editing_index != NEW_MODEL
        )

    def render_modal(self) -> Optional[str]:
        if self.modal is None or self.config is None:
            return None
        candidates = self.list_candidates(self.modal.target) if self.modal.target else []
        return renderer.render_guided_modal(self.modal, self.config, candidates)

    def render_page(self) -> str:
        return renderer.render_page(self.config)

    def _reset_model_form(self) -> None:
        self.model_form_open = False
        self.editing_index = NEW_MODEL

    def _open_model_form(self, action: OpenModelForm) -> Transition:
        if action.index != NEW_MODEL and not 0 <= action.index < len(self.config.model_list()):
            raise FormValidationError(f"No model at position {action.index}")
        self.editing_index = action.index
        self.model_form_open = True
        return Transition()

    def _close_model_form(self, action: CloseModelForm) -> Transition:
        self._reset_model_form()
        return Transition()

    def _submit_model_form(self, action: SubmitModelForm) -> Transition:
        if not self.model_form_open:
            raise FormValidationError("The model form is not open")

        model = build_model(action.form)
        models = self.config.model_list()
        if self.editing_index == NEW_MODEL:
            models.append(model)
        else:
            models[self.editing_index] = model
        self.config.models = models

        self._reset_model_form()
        self.notify("Model saved successfully", "success")
        # Commands appear on the default lists too
        return Transition(sections=renderer.ALL_SECTIONS)

    def _delete_model(self, action: DeleteModel) -> Transition:
        if not self.model_form_open or self.editing_index == NEW_MODEL:
            raise FormValidationError("Only an existing model can be deleted")
        if not action.confirmed:
            return Transition(confirm=DELETE_CONFIRMATION)

        models = self.config.model_list()
        removed = models.pop(self.editing_index)
        self.config.models = models
        logger.info(f"Deleted model {removed.name}")

        self._reset_model_form()
        self.notify("Model deleted successfully", "success")
        return Transition(sections=renderer.ALL_SECTIONS)

    def _open_add_provider(self, action: OpenAddProvider) -> Transition:
        self.modal = GuidedModal(kind="add_provider")
        return Transition()

    def _submit_add_provider(self, action: SubmitAddProvider) -> Transition:
        name = action.name.strip()
        if not name:
            raise FormValidationError("Provider name is required")

        order = self.config.name_list("providers_order")
        if name in order:
            raise FormValidationError(f"Provider {name} is already in the list")

        self.config.providers_order = order + [name]
        self.modal = None
        self.notify(f"Provider {name} added", "success")
        return Transition(sections=[renderer.SECTION_PROVIDERS])

    def _remove_provider(self, action: RemoveProvider) -> Transition:
        order = self.config.name_list("providers_order")
        if action.name not in order:
            return Transition()

        self.config.providers_order = [name for name in order if name != action.name]
        self.notify(f"Provider {action.name} removed", "success")
        return Transition(sections=[renderer.SECTION_PROVIDERS])

    def _open_add_to_list(self, action: OpenAddToList) -> Transition:
        self.modal = GuidedModal(kind="add_to_list", target=action.target)
        return Transition()

    def _submit_add_to_list(self, action: SubmitAddToList) -> Transition:
        if not action.model_name:
            raise FormValidationError("Select a model to add")

        candidates = [model.name for model in self.list_candidates(action.target)]
        if action.model_name not in candidates:
            raise FormValidationError(f"Model {action.model_name} cannot be added to this list")

        setattr(self.config, action.target, self.config.name_list(action.target) + [action.model_name])
        self.modal = None
        self.notify(f"Added {action.model_name}", "success")
        return Transition(sections=[renderer.DEFAULT_LIST_SECTIONS[action.target]])

    def _remove_from_list(self, action: RemoveFromList) -> Transition:
        names = self.config.name_list(action.target)
        if action.name not in names:
            return Transition()

        setattr(self.config, action.target, [name for name in names if name != action.name])
        self.notify(f"Removed {action.name}", "success")
        return Transition(sections=[renderer.DEFAULT_LIST_SECTIONS[action.target]])

    def _open_edit_version(self, action: OpenEditVersion) -> Transition:
        self.modal = GuidedModal(kind="edit_version")
        return Transition()

    def _submit_edit_version(self, action: SubmitEditVersion) -> Transition:
        value = action.value.strip()
        if not re.fullmatch(r"\d+", value, re.ASCII):
            raise FormValidationError("Version must be a whole number")
        version = int(value)
        if version < 1:
            raise FormValidationError("Version must be at least 1")

        self.config.current_version = version
        self.modal = None
        self.notify(f"Version set to {version}", "success")
        return Transition(sections=[renderer.SECTION_VERSION])

    def _close_modal(self, action: CloseModal) -> Transition:
        self.modal = None
        return Transition()

    def _reorder(self, action: Reorder) -> Transition:
        sortable = apply_reorder(self.config, action.field, action.order)
        if sortable.rerender_all:
            # Model card indices changed; an open edit form would point elsewhere
            self._reset_model_form()
            return Transition(sections=renderer.ALL_SECTIONS)
        return Transition(sections=[sortable.container_id])


# Global session instance
_session: Optional[EditorSession] = None


def get_editor_session() -> EditorSession:
    """Get the process-wide editor session"""
    global _session
    if _session is None:
        editor_config = get_config().editor
        _session = EditorSession(
            gateway=ConfigGateway.from_config(editor_config),
            notification_seconds=editor_config.notification_seconds
        )
    return _session


def set_editor_session(session: Optional[EditorSession]) -> None:
    """Replace the process-wide session (None recreates it from config)"""
    global _session
    _session = session
