from __future__ import annotations

from datetime import datetime

import pydantic
import pytest

from prompt_curator.core.exceptions import ValidationError
from prompt_curator.schemas import wire
from prompt_curator.schemas.prompts import CreatePromptInput, GetPromptInput, Prompt, UpdatePromptInput


def test_create_input_defaults_tags_and_image_url():
    payload = CreatePromptInput(text="Write a story", description=None)
    assert payload.tags == []
    assert payload.image_url is None


def test_create_input_rejects_empty_text():
    with pytest.raises(pydantic.ValidationError):
        CreatePromptInput(text="", description=None)


def test_create_input_requires_description_key():
    with pytest.raises(pydantic.ValidationError):
        CreatePromptInput.model_validate({"text": "no description key"})


def test_create_input_rejects_wrong_primitive_types():
    with pytest.raises(pydantic.ValidationError):
        CreatePromptInput.model_validate({"text": 42, "description": None})
    with pytest.raises(pydantic.ValidationError):
        CreatePromptInput.model_validate({"text": "ok", "description": None, "tags": ["a", 1]})


def test_create_input_accepts_any_image_url_string():
    payload = CreatePromptInput(text="ok", description=None, image_url="not really a url")
    assert payload.image_url == "not really a url"


def test_update_input_tracks_presence_separately_from_value():
    absent = UpdatePromptInput.model_validate({"id": 1})
    cleared = UpdatePromptInput.model_validate({"id": 1, "description": None})

    assert absent.changes() == {}
    assert cleared.changes() == {"description": None}


def test_update_input_rejects_null_for_non_nullable_fields():
    with pytest.raises(pydantic.ValidationError, match="text cannot be null"):
        UpdatePromptInput.model_validate({"id": 1, "text": None})
    with pytest.raises(pydantic.ValidationError, match="tags cannot be null"):
        UpdatePromptInput.model_validate({"id": 1, "tags": None})


def test_update_input_rejects_empty_text():
    with pytest.raises(pydantic.ValidationError):
        UpdatePromptInput.model_validate({"id": 1, "text": ""})


def test_id_must_be_an_integer():
    with pytest.raises(pydantic.ValidationError):
        GetPromptInput.model_validate({"id": "7"})


def test_prompt_output_coerces_iso_dates():
    prompt = Prompt.model_validate(
        {
            "id": 1,
            "text": "cats",
            "description": None,
            "tags": ["animal"],
            "created_at": "2026-01-01T10:00:00",
            "updated_at": "2026-01-02T10:00:00",
        }
    )
    assert prompt.created_at == datetime(2026, 1, 1, 10, 0)
    assert prompt.updated_at > prompt.created_at


def test_wire_decode_reports_violated_constraint():
    with pytest.raises(ValidationError) as exc:
        wire.decode(CreatePromptInput, {"text": "", "description": None})
    assert [issue["path"] for issue in exc.value.issues] == ["text"]
    assert "CreatePromptInput" in str(exc.value)


def test_wire_parse_json_handles_blank_and_malformed_input():
    assert wire.parse_json(None) is None
    assert wire.parse_json("  ") is None
    assert wire.parse_json('{"id": 3}') == {"id": 3}
    with pytest.raises(ValidationError):
        wire.parse_json("{not json")


def test_wire_encode_input_sends_only_set_fields():
    payload = UpdatePromptInput(id=4, image_url=None)
    assert wire.encode_input(payload) == {"id": 4, "image_url": None}
