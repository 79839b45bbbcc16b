from __future__ import annotations

from datetime import datetime

import pytest

from prompt_curator.client.views import (
    ALL_TAGS,
    SORT_ALPHABETICAL,
    SORT_NEWEST,
    SORT_OLDEST,
    TagCount,
    aggregate_tags,
    derive_view,
    filter_prompts,
    sort_prompts,
)
from tests.factories import make_prompt


@pytest.fixture
def pets():
    return [
        make_prompt(1, "cats", tags=["animal"]),
        make_prompt(2, "dogs", tags=["animal", "pet"]),
    ]


def test_tag_filter_keeps_only_tagged_prompts(pets):
    assert [p.text for p in filter_prompts(pets, selected_tag="pet")] == ["dogs"]


def test_search_matches_text(pets):
    assert [p.text for p in filter_prompts(pets, search_query="cat")] == ["cats"]


def test_alphabetical_sort(pets):
    assert [p.text for p in sort_prompts(list(reversed(pets)), SORT_ALPHABETICAL)] == ["cats", "dogs"]


def test_search_is_case_insensitive_across_description_and_tags():
    prompts = [
        make_prompt(1, "Sunset", description="Golden HOUR glow"),
        make_prompt(2, "Forest", tags=["Moss"]),
        make_prompt(3, "Ocean"),
    ]
    assert [p.id for p in filter_prompts(prompts, search_query="hour")] == [1]
    assert [p.id for p in filter_prompts(prompts, search_query="MOSS")] == [2]


def test_blank_query_and_all_tag_pass_through(pets):
    assert filter_prompts(pets, search_query="   ", selected_tag=ALL_TAGS) == pets


def test_newest_and_oldest_sort_on_created_at():
    early = make_prompt(1, "early", created_at=datetime(2026, 1, 1))
    late = make_prompt(2, "late", created_at=datetime(2026, 3, 1))
    middle = make_prompt(3, "middle", created_at=datetime(2026, 2, 1))
    prompts = [early, late, middle]

    assert [p.text for p in sort_prompts(prompts, SORT_NEWEST)] == ["late", "middle", "early"]
    assert [p.text for p in sort_prompts(prompts, SORT_OLDEST)] == ["early", "middle", "late"]


def test_alphabetical_sort_ignores_case():
    prompts = [make_prompt(1, "zebra"), make_prompt(2, "Apple"), make_prompt(3, "mango")]
    assert [p.text for p in sort_prompts(prompts, SORT_ALPHABETICAL)] == ["Apple", "mango", "zebra"]


def test_sort_does_not_mutate_source(pets):
    source = list(reversed(pets))
    snapshot = list(source)

    sort_prompts(source, SORT_ALPHABETICAL)

    assert source == snapshot


def test_unknown_sort_option_raises(pets):
    with pytest.raises(ValueError):
        sort_prompts(pets, "random")


def test_derive_view_combines_filters_and_sort():
    prompts = [
        make_prompt(1, "red fox", tags=["animal"]),
        make_prompt(2, "blue fox", tags=["animal"]),
        make_prompt(3, "fox logo", tags=["brand"]),
    ]
    view = derive_view(prompts, search_query="fox", selected_tag="animal", sort_by=SORT_ALPHABETICAL)
    assert [p.text for p in view] == ["blue fox", "red fox"]


def test_aggregate_tags_counts_prompts_per_tag(pets):
    assert aggregate_tags(pets) == [TagCount("animal", 2), TagCount("pet", 1)]


def test_aggregate_tags_on_empty_list():
    assert aggregate_tags([]) == []
