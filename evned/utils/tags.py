"""Tag utilities for parsing and normalization."""

from __future__ import annotations

from typing import Iterable


def parse_tag_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag argument into tag names.

    - Surrounding whitespace is stripped and empty entries are dropped.
    - Tags are de-duplicated while preserving the first occurrence order.
    """

    if not raw:
        return ()
    return dedupe_tags(part.strip() for part in raw.split(","))


def dedupe_tags(tags: Iterable[str]) -> tuple[str, ...]:
    ordered: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        if tag and tag not in seen:
            seen.add(tag)
            ordered.append(tag)
    return tuple(ordered)
