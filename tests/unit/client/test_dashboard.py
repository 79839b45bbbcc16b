from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import prompt_curator.client as client_package
from prompt_curator.client.controller import PromptController
from tests.factories import make_prompt

DASHBOARD = str(Path(client_package.__file__).with_name("dashboard.py"))


class _FakeClient:
    def __init__(self, prompts=None):
        self.rows = {prompt.id: prompt for prompt in prompts or []}
        self.created = []

    def get_prompts(self):
        return list(self.rows.values())

    def create_prompt(self, payload):
        prompt = make_prompt(len(self.rows) + 1, payload.text, tags=payload.tags, description=payload.description)
        self.rows[prompt.id] = prompt
        self.created.append(payload.text)
        return prompt

    def update_prompt(self, payload):
        return None

    def delete_prompt(self, prompt_id):
        return self.rows.pop(prompt_id, None) is not None


def _app(client):
    controller = PromptController(client=client)
    controller.load()
    at = AppTest.from_file(DASHBOARD, default_timeout=30)
    at.session_state["controller"] = controller
    at.run()
    assert not at.exception
    return at


def test_create_form_is_empty_after_successful_create():
    client = _FakeClient()
    at = _app(client)

    at.text_area(key="create_0_text").input("a red fox").run()
    at.button(key="create_0_submit").click().run()

    assert not at.exception
    assert client.created == ["a red fox"]
    assert at.text_area(key="create_1_text").value == ""
    assert at.session_state["create_form"].text == ""
    assert at.button(key="create_1_submit").disabled


def test_confirmed_delete_drops_the_card():
    client = _FakeClient([make_prompt(1, "cats"), make_prompt(2, "dogs")])
    at = _app(client)
    assert set(at.session_state["cards"]) == {1, 2}

    at.button(key="delete_1").click().run()
    at.button(key="confirm_delete_1").click().run()

    assert not at.exception
    assert set(at.session_state["cards"]) == {2}
    assert [prompt.id for prompt in at.session_state["controller"].prompts] == [2]


@pytest.mark.parametrize("query", ["cat", "zzz"])
def test_search_box_drives_the_grid(query):
    client = _FakeClient([make_prompt(1, "cats"), make_prompt(2, "dogs")])
    at = _app(client)

    at.text_input[0].input(query).run()

    assert at.session_state["controller"].search_query == query
    assert not at.exception
