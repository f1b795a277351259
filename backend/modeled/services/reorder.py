"""Drag-and-drop list reordering.

The browser wraps each reorderable container with SortableJS using the
options rendered into its ``data-sortable`` attribute. When a drag ends the
client reports the identifiers of the container's children in their new
order, and ``apply_reorder`` writes that order back to the configuration.
"""

import json
from pydantic import BaseModel
from typing import Optional, List, Dict

from modeled.models.catalog import Configuration, ReorderField
from modeled.services.errors import FormValidationError


class SortableList(BaseModel):
    """Reorder options for one container"""
    field: ReorderField
    container_id: str
    group: Optional[str] = None  # scopes dragging to this one list
    animation: int = 150
    ghost_class: str = "sortable-ghost"
    chosen_class: str = "sortable-chosen"
    # Model cards embed their positional index, so the whole page re-renders
    rerender_all: bool = False


SORTABLE_LISTS: Dict[str, SortableList] = {
    "models": SortableList(field="models", container_id="models-list", rerender_all=True),
    "providers_order": SortableList(field="providers_order", container_id="providers-list"),
    "default_models": SortableList(
        field="default_models", container_id="default-models", group="default-models"
    ),
    "narrator_models": SortableList(
        field="narrator_models", container_id="narrator-models", group="narrator-models"
    ),
    "default_vision_models": SortableList(
        field="default_vision_models", container_id="vision-models", group="vision-models"
    ),
}


def sortable_attribute(field: str) -> str:
    """JSON options for the container's data-sortable attribute (unescaped)"""
    sortable = SORTABLE_LISTS[field]
    options = {
        "field": sortable.field,
        "animation": sortable.animation,
        "ghostClass": sortable.ghost_class,
        "chosenClass": sortable.chosen_class,
    }
    if sortable.group:
        options["group"] = sortable.group
    return json.dumps(options)


def apply_reorder(config: Configuration, field: str, order: List[str]) -> SortableList:
    """Write a post-drag order back to the matching configuration field.

    Model cards are identified by their index in the rendered list; every
    other list is identified by the name shown on the row.
    """
    sortable = SORTABLE_LISTS.get(field)
    if sortable is None:
        raise FormValidationError(f"List {field} cannot be reordered")

    if field == "models":
        models = config.model_list()
        try:
            indices = [int(item) for item in order]
        except ValueError:
            raise FormValidationError("Model order contains an invalid card index")

        if sorted(indices) != list(range(len(models))):
            raise FormValidationError("Model order does not match the current model list")

        config.models = [models[i] for i in indices]
    else:
        setattr(config, field, list(order))

    return sortable
