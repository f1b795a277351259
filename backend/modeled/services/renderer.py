"""HTML renderers for the editor page.

Every section renderer returns the complete container element so the browser
can swap it by id. Reorderable containers carry their sortable options on
each render, which lets the client re-attach drag handling to whatever
elements are current.
"""

from typing import Optional, List

from modeled.models.catalog import Configuration, Model, ModelRef
from modeled.models.editor import GuidedModal, Notification
from modeled.services.reorder import SORTABLE_LISTS, sortable_attribute
from modeled.utils.escaping import escape_html


SECTION_MODELS = "models-list"
SECTION_PROVIDERS = "providers-list"
SECTION_VERSION = "current-version"

# Default list field -> container id
DEFAULT_LIST_SECTIONS = {
    "default_models": "default-models",
    "narrator_models": "narrator-models",
    "default_vision_models": "vision-models",
}

DEFAULT_LIST_TITLES = {
    "default_models": "Default Models",
    "narrator_models": "Narrator Models",
    "default_vision_models": "Vision Models",
}

ALL_SECTIONS = [
    SECTION_VERSION,
    SECTION_MODELS,
    SECTION_PROVIDERS,
    *DEFAULT_LIST_SECTIONS.values(),
]

MODEL_FLAGS = [
    ("vision", "Vision"),
    ("reasoning", "Reasoning"),
    ("is_llama", "Llama"),
    ("is_markov", "Markov"),
    ("is_eliza", "Eliza"),
    ("limited", "Limited"),
]


def _empty_state(message: str) -> str:
    return f'<div class="empty-state"><p>{escape_html(message)}</p></div>'


def _sortable_attr(field: str) -> str:
    return f' data-sortable="{escape_html(sortable_attribute(field))}"'


def render_version(config: Optional[Configuration]) -> str:
    version = config.current_version if config is not None else None
    text = str(version) if version is not None else "unset"
    return f'<span id="{SECTION_VERSION}" class="version-value">{escape_html(text)}</span>'


def render_models(models: Optional[List[Model]]) -> str:
    container_id = SORTABLE_LISTS["models"].container_id
    if not models:
        return f'<div id="{container_id}" class="models-grid">{_empty_state("No models configured")}</div>'

    cards = []
    for index, model in enumerate(models):
        tags = "".join(
            f'<span class="feature-tag {tag.lower()}">{escape_html(tag)}</span>'
            for tag in model.tags
        )
        providers = ", ".join(model.provider_names)
        cards.append(
            f'<div class="model-card" data-id="{index}" data-action="open_model_form" data-index="{index}">'
            f'<div class="model-header">'
            f'<div class="model-name">{escape_html(model.name)}</div>'
            f'<div class="model-command">/{escape_html(model.command)}</div>'
            f'</div>'
            f'<div class="model-features">{tags}</div>'
            f'<div class="model-providers">Providers: {escape_html(providers)}</div>'
            f'</div>'
        )

    return (
        f'<div id="{container_id}" class="models-grid"{_sortable_attr("models")}>'
        f'{"".join(cards)}</div>'
    )


def render_providers(providers_order: Optional[List[str]]) -> str:
    container_id = SORTABLE_LISTS["providers_order"].container_id
    if not providers_order:
        return f'<ul id="{container_id}" class="sortable-list">{_empty_state("No providers configured")}</ul>'

    rows = "".join(
        f'<li class="sortable-item" data-id="{escape_html(provider)}">'
        f'<span class="item-label">{escape_html(provider)}</span>'
        f'<button type="button" class="remove-btn" data-action="remove_provider" '
        f'data-name="{escape_html(provider)}">Remove</button>'
        f'</li>'
        for provider in providers_order
    )
    return (
        f'<ul id="{container_id}" class="sortable-list"'
        f'{_sortable_attr("providers_order")}>{rows}</ul>'
    )


def render_default_list(field: str, refs: List[ModelRef]) -> str:
    """Render one default list; dangling names show without a command"""
    container_id = DEFAULT_LIST_SECTIONS[field]
    if not refs:
        return f'<div id="{container_id}" class="sortable-list">{_empty_state("No models selected")}</div>'

    rows = []
    for ref in refs:
        command = ""
        if not ref.dangling:
            command = f'<span class="model-command">/{escape_html(ref.model.command)}</span>'
        rows.append(
            f'<div class="sortable-item" data-id="{escape_html(ref.name)}">'
            f'<span class="item-label">{escape_html(ref.name)}</span>{command}'
            f'<button type="button" class="remove-btn" data-action="remove_from_list" '
            f'data-target="{field}" data-name="{escape_html(ref.name)}">Remove</button>'
            f'</div>'
        )

    return (
        f'<div id="{container_id}" class="sortable-list"'
        f'{_sortable_attr(field)}>{"".join(rows)}</div>'
    )


def render_section(section_id: str, config: Optional[Configuration]) -> str:
    """Render one page section by container id"""
    if section_id == SECTION_VERSION:
        return render_version(config)
    if section_id == SECTION_MODELS:
        return render_models(config.models if config is not None else None)
    if section_id == SECTION_PROVIDERS:
        return render_providers(config.providers_order if config is not None else None)
    for field, container_id in DEFAULT_LIST_SECTIONS.items():
        if container_id == section_id:
            refs = config.resolve_list(field) if config is not None else []
            return render_default_list(field, refs)
    raise KeyError(f"Unknown section: {section_id}")


def _provider_row(name: str = "", codenames: str = "") -> str:
    return (
        f'<div class="provider-item">'
        f'<div class="provider-header">'
        f'<input type="text" class="provider-name" placeholder="Provider name (e.g., openrouter)" '
        f'value="{escape_html(name)}">'
        f'<button type="button" class="remove-provider" data-remove-row>Remove</button>'
        f'</div>'
        f'<input type="text" class="codenames-input" placeholder="Codenames (comma-separated)" '
        f'value="{escape_html(codenames)}">'
        f'</div>'
    )


def render_model_form(model: Optional[Model], editing: bool) -> str:
    """Add (blank) or edit (pre-populated) model form"""
    if model is None:
        model = Model()
    title = "Edit Model" if editing else "Add New Model"

    checkboxes = "".join(
        f'<label class="checkbox-label"><input type="checkbox" name="{field}"'
        f'{" checked" if getattr(model, field) else ""}> {label}</label>'
        for field, label in MODEL_FLAGS
    )
    rows = "".join(
        _provider_row(name, ", ".join(binding.codenames or []))
        for name, binding in model.providers.items()
    )
    delete_button = (
        '<button type="button" class="btn btn-danger" data-action="delete_model">Delete</button>'
        if editing else ""
    )

    return (
        f'<div class="modal-content">'
        f'<div class="modal-header"><h2>{title}</h2>'
        f'<span class="close" data-action="close_model_form">&times;</span></div>'
        f'<form id="modelForm" data-submit="submit_model_form">'
        f'<div class="form-group"><label>Name</label>'
        f'<input type="text" name="name" value="{escape_html(model.name)}" required></div>'
        f'<div class="form-group"><label>Command</label>'
        f'<input type="text" name="command" value="{escape_html(model.command)}" required></div>'
        f'<div class="form-group checkbox-group">{checkboxes}</div>'
        f'<div class="form-group"><label>Encoding</label>'
        f'<input type="text" name="encoding" value="{escape_html(model.encoding)}" '
        f'placeholder="cl100k_base"></div>'
        f'<div class="form-group"><label>Providers</label>'
        f'<div id="providers-container">{rows}</div>'
        f'<template id="provider-row-template">{_provider_row()}</template>'
        f'<button type="button" class="btn btn-secondary" data-add-row>Add Provider</button></div>'
        f'<div class="modal-actions">{delete_button}'
        f'<button type="button" class="btn btn-secondary" data-action="close_model_form">Cancel</button>'
        f'<button type="submit" class="btn btn-primary">Save Model</button></div>'
        f'</form></div>'
    )


def _guided_modal(title: str, body: str, submit_label: Optional[str]) -> str:
    submit = (
        f'<button type="submit" class="btn btn-primary">{submit_label}</button>'
        if submit_label else ""
    )
    return (
        f'<div class="modal-content modal-small">'
        f'<div class="modal-header"><h2>{title}</h2>'
        f'<span class="close" data-action="close_modal">&times;</span></div>'
        f'{body}'
        f'<div class="modal-actions">'
        f'<button type="button" class="btn btn-secondary" data-action="close_modal">Cancel</button>'
        f'{submit}</div>'
        f'</div>'
    )


def render_add_provider_modal() -> str:
    body = (
        '<form data-submit="submit_add_provider">'
        '<div class="form-group"><label>Provider name</label>'
        '<input type="text" name="name" placeholder="e.g., openrouter" autofocus></div>'
        '</form>'
    )
    return _guided_modal("Add Provider", body, "Add")


def render_add_to_list_modal(target: str, candidates: List[Model]) -> str:
    title = f"Add to {DEFAULT_LIST_TITLES[target]}"
    if not candidates:
        return _guided_modal(title, _empty_state("No models available to add"), None)

    options = "".join(
        f'<option value="{escape_html(model.name)}">'
        f'{escape_html(model.name)} (/{escape_html(model.command)})</option>'
        for model in candidates
    )
    body = (
        f'<form data-submit="submit_add_to_list" data-target="{target}">'
        f'<div class="form-group"><label>Model</label>'
        f'<select name="model_name">{options}</select></div>'
        f'</form>'
    )
    return _guided_modal(title, body, "Add")


def render_edit_version_modal(current_version: Optional[int]) -> str:
    value = escape_html(current_version) if current_version is not None else ""
    body = (
        f'<form data-submit="submit_edit_version">'
        f'<div class="form-group"><label>Current version</label>'
        f'<input type="number" name="value" min="1" step="1" value="{value}" autofocus></div>'
        f'</form>'
    )
    return _guided_modal("Edit Version", body, "Save")


def render_guided_modal(modal: GuidedModal, config: Configuration, candidates: List[Model]) -> str:
    if modal.kind == "add_provider":
        return render_add_provider_modal()
    if modal.kind == "add_to_list":
        return render_add_to_list_modal(modal.target, candidates)
    return render_edit_version_modal(config.current_version)


def render_notification(notification: Optional[Notification]) -> str:
    if notification is None:
        return ""
    return (
        f'<div class="status-message status-{notification.level}" '
        f'data-ttl="{notification.ttl_seconds}">{escape_html(notification.message)}</div>'
    )


def render_page(config: Optional[Configuration], title: str = "Model Editor") -> str:
    """Full editor page; the browser script takes over from here"""
    defaults = "".join(
        f'<div class="default-group">'
        f'<div class="group-header"><h3>{DEFAULT_LIST_TITLES[field]}</h3>'
        f'<button type="button" class="btn btn-secondary" data-action="open_add_to_list" '
        f'data-target="{field}">Add</button></div>'
        f'{render_section(container_id, config)}'
        f'</div>'
        for field, container_id in DEFAULT_LIST_SECTIONS.items()
    )

    return (
        f'<!DOCTYPE html>'
        f'<html lang="en"><head><meta charset="utf-8">'
        f'<title>{escape_html(title)}</title>'
        f'<link rel="stylesheet" href="/static/editor.css">'
        f'<script src="https://cdn.jsdelivr.net/npm/sortablejs@1.15.2/Sortable.min.js"></script>'
        f'</head><body>'
        f'<div class="container">'
        f'<div class="header"><h1>{escape_html(title)}</h1>'
        f'<div class="header-actions">'
        f'<span class="version">Version: {render_version(config)} '
        f'<button type="button" class="btn btn-link" data-action="open_edit_version">Edit</button></span>'
        f'<button type="button" class="btn btn-secondary" id="reloadBtn">Reload</button>'
        f'<button type="button" class="btn btn-primary" id="saveBtn">Save</button>'
        f'</div></div>'
        f'<div id="status-area"></div>'
        f'<section class="panel"><div class="group-header"><h2>Models</h2>'
        f'<button type="button" class="btn btn-primary" data-action="open_model_form" '
        f'data-index="-1">Add Model</button></div>'
        f'{render_section(SECTION_MODELS, config)}</section>'
        f'<section class="panel"><div class="group-header"><h2>Provider Order</h2>'
        f'<button type="button" class="btn btn-secondary" data-action="open_add_provider">Add</button></div>'
        f'{render_section(SECTION_PROVIDERS, config)}</section>'
        f'<section class="panel"><h2>Defaults</h2>{defaults}</section>'
        f'</div>'
        f'<div id="modelModal" class="modal"></div>'
        f'<div id="guidedModal" class="modal"></div>'
        f'<script src="/static/editor.js"></script>'
        f'</body></html>'
    )
