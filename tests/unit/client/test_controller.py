from __future__ import annotations

from datetime import datetime

import pytest

from prompt_curator.client.controller import PromptController
from prompt_curator.client.views import ALL_TAGS, SORT_ALPHABETICAL, SORT_NEWEST, TagCount
from prompt_curator.core.exceptions import RemoteCallError
from prompt_curator.schemas.prompts import CreatePromptInput, Prompt, UpdatePromptInput
from tests.factories import make_prompt


class _FakeClient:
    def __init__(self, prompts=None):
        self.rows = {prompt.id: prompt for prompt in prompts or []}
        self.next_id = max(self.rows, default=0) + 1
        self.calls = []

    def get_prompts(self):
        self.calls.append("getPrompts")
        return list(self.rows.values())

    def create_prompt(self, payload: CreatePromptInput) -> Prompt:
        self.calls.append("createPrompt")
        prompt = make_prompt(self.next_id, payload.text, tags=payload.tags, description=payload.description)
        self.rows[prompt.id] = prompt
        self.next_id += 1
        return prompt

    def update_prompt(self, payload: UpdatePromptInput):
        self.calls.append("updatePrompt")
        current = self.rows.get(payload.id)
        if current is None:
            return None
        updated = current.model_copy(update={**payload.changes(), "updated_at": datetime(2027, 1, 1)})
        self.rows[payload.id] = updated
        return updated

    def delete_prompt(self, prompt_id: int) -> bool:
        self.calls.append("deletePrompt")
        return self.rows.pop(prompt_id, None) is not None


class _FailingClient:
    def _fail(self, *args, **kwargs):
        raise RemoteCallError("connection refused", procedure="any")

    get_prompts = create_prompt = update_prompt = delete_prompt = _fail


@pytest.fixture
def controller():
    client = _FakeClient(
        [
            make_prompt(1, "cats", tags=["animal"]),
            make_prompt(2, "dogs", tags=["animal", "pet"]),
        ]
    )
    ctrl = PromptController(client=client)
    ctrl.load()
    return ctrl


def test_load_fetches_once_and_clears_loading_flag(controller):
    assert controller.client.calls == ["getPrompts"]
    assert controller.is_loading is False
    assert [p.text for p in controller.prompts] == ["cats", "dogs"]


def test_create_appends_without_refetch(controller):
    created = controller.create(CreatePromptInput(text="birds", description=None, tags=["animal"]))

    assert created is not None
    assert controller.prompts[-1] == created
    assert controller.client.calls == ["getPrompts", "createPrompt"]


def test_update_replaces_matching_entry(controller):
    updated = controller.update(UpdatePromptInput(id=2, tags=["pet"]))

    assert updated is not None
    assert [p.tags for p in controller.prompts] == [["animal"], ["pet"]]


def test_update_of_missing_prompt_leaves_list(controller):
    before = list(controller.prompts)
    assert controller.update(UpdatePromptInput(id=99, text="ghost")) is None
    assert controller.prompts == before


def test_delete_removes_entry_only_when_confirmed(controller):
    assert controller.delete(1) is True
    assert [p.id for p in controller.prompts] == [2]

    assert controller.delete(1) is False
    assert [p.id for p in controller.prompts] == [2]


def test_failures_are_logged_and_leave_state_unchanged(controller, caplog):
    before = list(controller.prompts)
    controller.client = _FailingClient()

    assert controller.load() is False
    assert controller.create(CreatePromptInput(text="x", description=None)) is None
    assert controller.update(UpdatePromptInput(id=1, text="y")) is None
    assert controller.delete(1) is False

    assert controller.prompts == before
    assert controller.is_loading is False
    assert controller.last_error == "connection refused"
    assert "prompts.delete.failed" in caplog.text


def test_filter_scenario(controller):
    controller.selected_tag = "pet"
    assert [p.text for p in controller.view] == ["dogs"]

    controller.selected_tag = ALL_TAGS
    controller.search_query = "cat"
    assert [p.text for p in controller.view] == ["cats"]

    controller.search_query = ""
    controller.set_sort(SORT_ALPHABETICAL)
    assert [p.text for p in controller.view] == ["cats", "dogs"]


def test_view_recomputes_after_mutation(controller):
    controller.selected_tag = "pet"
    controller.create(CreatePromptInput(text="hamster", description=None, tags=["pet"]))
    assert [p.text for p in controller.view] == ["hamster", "dogs"]


def test_tag_counts_use_unfiltered_list(controller):
    controller.search_query = "cats"
    assert controller.tag_counts == [TagCount("animal", 2), TagCount("pet", 1)]


def test_clear_filters_resets_controls(controller):
    controller.search_query = "cat"
    controller.selected_tag = "pet"
    controller.set_sort(SORT_ALPHABETICAL)
    assert controller.has_active_filters and controller.can_clear_filters

    controller.clear_filters()

    assert (controller.search_query, controller.selected_tag, controller.sort_by) == ("", ALL_TAGS, SORT_NEWEST)
    assert not controller.can_clear_filters


def test_set_sort_rejects_unknown_option(controller):
    with pytest.raises(ValueError):
        controller.set_sort("shuffle")
