"""Tests for drag-and-drop reordering."""

import json

import pytest

from modeled.models.catalog import Configuration
from modeled.models.editor import ModelForm, OpenModelForm, Reorder, SubmitModelForm
from modeled.services.errors import FormValidationError
from modeled.services.reorder import SORTABLE_LISTS, apply_reorder, sortable_attribute


def make_config():
    return Configuration.model_validate({
        "models": [
            {"name": "A", "command": "a"},
            {"name": "B", "command": "b"},
            {"name": "C", "command": "c"},
        ],
        "providers_order": ["groq", "cerebras", "openrouter"],
        "default_models": ["A", "B", "C"],
        "narrator_models": ["B", "C"],
        "default_vision_models": ["A", "C"],
    })


def test_models_reordered_by_card_index():
    config = make_config()

    apply_reorder(config, "models", ["2", "0", "1"])

    assert [m.name for m in config.models] == ["C", "A", "B"]


@pytest.mark.parametrize("field,order", [
    ("providers_order", ["openrouter", "groq", "cerebras"]),
    ("default_models", ["C", "A", "B"]),
    ("narrator_models", ["C", "B"]),
    ("default_vision_models", ["C", "A"]),
])
def test_name_lists_take_dom_order(field, order):
    config = make_config()

    apply_reorder(config, field, order)

    assert getattr(config, field) == order
    assert config.to_document()[field] == order


@pytest.mark.parametrize("order", [["0", "1"], ["0", "1", "1"], ["0", "1", "x"], ["0", "1", "3"]])
def test_stale_model_order_rejected(order):
    config = make_config()

    with pytest.raises(FormValidationError):
        apply_reorder(config, "models", order)

    assert [m.name for m in config.models] == ["A", "B", "C"]


def test_default_lists_are_separate_groups():
    groups = {SORTABLE_LISTS[field].group for field in ("default_models", "narrator_models", "default_vision_models")}

    assert len(groups) == 3
    assert SORTABLE_LISTS["providers_order"].group is None


def test_sortable_attribute_options():
    options = json.loads(sortable_attribute("narrator_models"))

    assert options == {
        "field": "narrator_models",
        "animation": 150,
        "ghostClass": "sortable-ghost",
        "chosenClass": "sortable-chosen",
        "group": "narrator-models",
    }
    assert "group" not in json.loads(sortable_attribute("models"))


def test_session_rerenders_everything_after_model_drag(session):
    session.dispatch(OpenModelForm(index=-1))
    session.dispatch(SubmitModelForm(form=ModelForm(name="Second", command="second")))
    session.dispatch(OpenModelForm(index=0))

    result = session.dispatch(Reorder(field="models", order=["1", "0"]))

    assert [m.name for m in session.config.models] == ["Second", "GPT"]
    assert "models-list" in result.sections
    assert "default-models" in result.sections
    assert 'data-index="0"' in result.sections["models-list"]
    # Card indices moved, so the open edit form is closed
    assert result.model_form is None


def test_session_rerenders_only_dragged_list(session):
    session.config.default_models = ["GPT", "Gone"]

    result = session.dispatch(Reorder(field="default_models", order=["Gone", "GPT"]))

    assert session.config.default_models == ["Gone", "GPT"]
    assert list(result.sections) == ["default-models"]
    assert result.notification is None
