"""Single-page Prompt Curator client.

Run with ``streamlit run prompt_curator/client/dashboard.py`` while the RPC
server is up.
"""

from __future__ import annotations

import json
import logging

import streamlit as st
import streamlit.components.v1 as components

from prompt_curator.client.cards import PromptCard
from prompt_curator.client.controller import PromptController
from prompt_curator.client.forms import MAX_DESCRIPTION_LENGTH, MAX_TAG_LENGTH, MAX_TAGS, MAX_TEXT_LENGTH, PromptForm
from prompt_curator.client.views import ALL_TAGS, SORT_ALPHABETICAL, SORT_NEWEST, SORT_OLDEST
from prompt_curator.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

SORT_LABELS = {SORT_NEWEST: "Newest first", SORT_OLDEST: "Oldest first", SORT_ALPHABETICAL: "A-Z"}


def _browser_clipboard(text: str) -> None:
    components.html(f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>", height=0)


def _state() -> tuple[PromptController, dict[int, PromptCard]]:
    state = st.session_state
    if "controller" not in state:
        configure_logging()
        controller = PromptController()
        with st.spinner("Loading your prompt collection..."):
            controller.load()
        state.controller = controller
    defaults = {"cards": {}, "create_form": PromptForm(), "create_round": 0, "edit_form": None}
    for name, value in defaults.items():
        if name not in state:
            state[name] = value
    return state.controller, state.cards


def _card_for(cards: dict[int, PromptCard], prompt) -> PromptCard:
    card = cards.get(prompt.id)
    if card is None or card.prompt != prompt:
        card = PromptCard(prompt=prompt)
        cards[prompt.id] = card
    return card


def _add_tag(form: PromptForm, key: str) -> None:
    # Runs as a widget callback, so the tag input can still be cleared.
    form.set_tag_input(st.session_state.get(f"{key}_tag_input", ""))
    if form.add_tag() is None:
        st.session_state[f"{key}_tag_input"] = ""


def render_form(form: PromptForm, controller: PromptController, key: str) -> bool:
    """Render ``form``; returns True once the server accepted it."""
    form.set_text(
        st.text_area(
            "Prompt Text *",
            value=form.text,
            max_chars=MAX_TEXT_LENGTH,
            height=120,
            key=f"{key}_text",
            placeholder="A serene landscape with rolling hills at golden hour...",
        )
    )
    form.set_description(
        st.text_input(
            "Description (optional)",
            value=form.description or "",
            max_chars=MAX_DESCRIPTION_LENGTH,
            key=f"{key}_description",
        )
    )
    form.set_image_url(
        st.text_input(
            "Generated Image URL (optional)",
            value=form.image_url or "",
            key=f"{key}_image_url",
            placeholder="https://example.com/generated-image.jpg",
        )
    )

    st.caption(f"Tags ({len(form.tags)}/{MAX_TAGS})")
    tag_col, add_col = st.columns([4, 1])
    with tag_col:
        form.set_tag_input(
            st.text_input("Tag", key=f"{key}_tag_input", max_chars=MAX_TAG_LENGTH, label_visibility="collapsed")
        )
    with add_col:
        st.button(
            "Add tag",
            key=f"{key}_add_tag",
            disabled=not form.can_add_tag,
            on_click=_add_tag,
            args=(form, key),
        )
    if form.tag_error:
        st.error(form.tag_error)
    if form.tags:
        tag_columns = st.columns(min(len(form.tags), 5))
        for index, tag in enumerate(form.tags):
            if tag_columns[index % len(tag_columns)].button(f"#{tag} ✕", key=f"{key}_remove_{tag}"):
                form.remove_tag(tag)
                st.rerun()

    label = "Update Prompt" if form.is_edit else "Create Prompt"
    if st.button(label, key=f"{key}_submit", type="primary", disabled=not form.can_submit):
        if form.submit(controller) is not None:
            return True
        st.error(f"Could not save prompt: {controller.last_error or 'prompt not found'}")
    return False


def render_controls(controller: PromptController) -> None:
    search_col, tag_col, sort_col, clear_col = st.columns([3, 2, 2, 1])
    with search_col:
        controller.search_query = st.text_input(
            "Search",
            value=controller.search_query,
            placeholder="Search prompts, descriptions, or tags...",
        )
    with tag_col:
        counts = controller.tag_counts
        options = [ALL_TAGS, *[item.tag for item in counts]]
        labels = {ALL_TAGS: "All tags", **{item.tag: f"#{item.tag} ({item.count})" for item in counts}}
        if controller.selected_tag not in options:
            controller.selected_tag = ALL_TAGS
        controller.selected_tag = st.selectbox(
            "Filter by tag",
            options,
            index=options.index(controller.selected_tag),
            format_func=labels.get,
        )
    with sort_col:
        sort_options = list(SORT_LABELS)
        controller.set_sort(
            st.selectbox(
                "Sort",
                sort_options,
                index=sort_options.index(controller.sort_by),
                format_func=SORT_LABELS.get,
            )
        )
    with clear_col:
        if controller.can_clear_filters and st.button("Clear filters"):
            controller.clear_filters()
            st.rerun()

    if controller.has_active_filters:
        active = []
        if controller.search_query:
            active.append(f'Search: "{controller.search_query}"')
        if controller.selected_tag != ALL_TAGS:
            active.append(f"Tag: #{controller.selected_tag}")
        st.caption("Active filters: " + " · ".join(active))


def render_card(card: PromptCard, controller: PromptController, cards: dict[int, PromptCard]) -> None:
    prompt = card.prompt
    with st.container(border=True):
        if card.shows_image:
            try:
                st.image(prompt.image_url)
            except Exception as exc:
                card.mark_image_failed()
                logger.warning(
                    "prompt.image.failed",
                    extra={"event": "prompt.image.failed", "prompt_id": prompt.id, "error": str(exc)},
                )
                st.caption("Image unavailable")
            else:
                card.mark_image_loaded()

        st.markdown(prompt.text)
        if prompt.description:
            st.caption(prompt.description)
        if prompt.tags:
            st.markdown(" ".join(f"`#{tag}`" for tag in prompt.tags))
        st.caption(" · ".join(label for label in (card.created_label, card.updated_label) if label))

        copy_col, edit_col, delete_col = st.columns(3)
        with copy_col:
            if st.button("Copied!" if card.is_copied() else "Copy", key=f"copy_{prompt.id}"):
                card.copy_text(_browser_clipboard)
        with edit_col:
            if st.button("Edit", key=f"edit_{prompt.id}"):
                st.session_state.edit_form = card.edit()
                st.rerun()
        with delete_col:
            if st.button("Delete", key=f"delete_{prompt.id}"):
                card.request_delete()

        if card.confirming_delete:
            st.warning("Delete this prompt? This cannot be undone.")
            yes_col, no_col = st.columns(2)
            if yes_col.button("Delete", key=f"confirm_delete_{prompt.id}", type="primary"):
                if card.confirm_delete(controller):
                    cards.pop(prompt.id, None)
                else:
                    st.error(f"Could not delete prompt: {controller.last_error or 'already removed'}")
                st.rerun()
            if no_col.button("Cancel", key=f"cancel_delete_{prompt.id}"):
                card.cancel_delete()
                st.rerun()


def main() -> None:
    st.set_page_config(page_title="Prompt Curator", layout="wide")
    controller, cards = _state()

    st.title("Prompt Curator")
    st.write("Organize, manage, and curate your text-to-image prompts with search and tagging.")
    if controller.last_error:
        st.error(f"Request failed: {controller.last_error}")

    render_controls(controller)

    with st.expander("Create Prompt", expanded=not controller.prompts):
        # Widgets keep their own state per key, so a fresh key empties the form.
        if render_form(st.session_state.create_form, controller, key=f"create_{st.session_state.create_round}"):
            st.session_state.create_form = PromptForm()
            st.session_state.create_round += 1
            st.rerun()

    edit_form = st.session_state.edit_form
    if edit_form is not None:
        st.subheader("Edit Prompt")
        if render_form(edit_form, controller, key=f"edit_{edit_form.editing_id}"):
            st.session_state.edit_form = None
            st.rerun()
        if st.button("Cancel editing"):
            st.session_state.edit_form = None
            st.rerun()

    view = controller.view
    if controller.prompts:
        summary = f"Showing {len(view)} of {len(controller.prompts)} prompts"
        if controller.tag_counts:
            summary += f" · {len(controller.tag_counts)} unique tags"
        st.caption(summary)

    if controller.is_loading and not controller.prompts:
        st.info("Loading your prompt collection...")
    elif not controller.prompts:
        st.info("No prompts yet. Create your first prompt to start your collection.")
    elif not view:
        st.info("No prompts match your current search criteria. Try adjusting your filters.")
    else:
        columns = st.columns(3)
        for index, prompt in enumerate(view):
            with columns[index % 3]:
                render_card(_card_for(cards, prompt), controller, cards)


main()
