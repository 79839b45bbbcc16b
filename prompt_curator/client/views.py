"""Pure derived-view functions over the cached prompt list.

Nothing here mutates its input; the controller re-invokes these on every
state change.
"""

from __future__ import annotations

import locale
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from prompt_curator.schemas.prompts import Prompt

ALL_TAGS = "all"
SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_ALPHABETICAL = "alphabetical"
SORT_OPTIONS = (SORT_NEWEST, SORT_OLDEST, SORT_ALPHABETICAL)


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int


def matches_search(prompt: Prompt, query: str) -> bool:
    """Case-insensitive substring match on text, description or any tag."""
    needle = query.lower()
    if needle in prompt.text.lower():
        return True
    if prompt.description and needle in prompt.description.lower():
        return True
    return any(needle in tag.lower() for tag in prompt.tags)


def filter_prompts(
    prompts: Iterable[Prompt],
    search_query: str = "",
    selected_tag: str = ALL_TAGS,
) -> list[Prompt]:
    filtered = list(prompts)
    if search_query.strip():
        filtered = [prompt for prompt in filtered if matches_search(prompt, search_query)]
    if selected_tag != ALL_TAGS:
        filtered = [prompt for prompt in filtered if selected_tag in prompt.tags]
    return filtered


def _collation_key(value: str) -> tuple[str, str]:
    return locale.strxfrm(value.casefold()), locale.strxfrm(value)


def sort_prompts(prompts: Sequence[Prompt], sort_by: str = SORT_NEWEST) -> list[Prompt]:
    """Return a sorted copy; the source sequence is left as-is."""
    if sort_by == SORT_NEWEST:
        return sorted(prompts, key=lambda prompt: prompt.created_at, reverse=True)
    if sort_by == SORT_OLDEST:
        return sorted(prompts, key=lambda prompt: prompt.created_at)
    if sort_by == SORT_ALPHABETICAL:
        return sorted(prompts, key=lambda prompt: _collation_key(prompt.text))
    raise ValueError(f"Unknown sort option: {sort_by!r}")


def derive_view(
    prompts: Sequence[Prompt],
    search_query: str = "",
    selected_tag: str = ALL_TAGS,
    sort_by: str = SORT_NEWEST,
) -> list[Prompt]:
    return sort_prompts(filter_prompts(prompts, search_query, selected_tag), sort_by)


def aggregate_tags(prompts: Iterable[Prompt]) -> list[TagCount]:
    """Distinct tags across the list, sorted, each with the number of prompts carrying it."""
    counts: Counter[str] = Counter()
    for prompt in prompts:
        counts.update(set(prompt.tags))
    return [TagCount(tag=tag, count=counts[tag]) for tag in sorted(counts)]
