from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence


def split_path(path_expr: str) -> tuple[str, ...]:
    """
    Split a dotted path into its segments.

    Supported syntax:
      - field
      - a.b.c
      - list.0.name (numeric segments address list items)
      - $.a.b (a leading `$` root marker is ignored)

    Raises ValueError for empty paths or empty segments.
    """
    if not isinstance(path_expr, str) or not path_expr.strip():
        raise ValueError(f"Path must be a non-empty string: {path_expr!r}")

    tokens = path_expr.strip().split(".")
    if tokens[0] == "$":
        tokens = tokens[1:]

    if not tokens or any(token == "" for token in tokens):
        raise ValueError(f"Path contains an empty segment: {path_expr!r}")

    return tuple(tokens)


def get_value_from_path(data: Any, path: Sequence[str]) -> Any:
    """
    Walk `path` through nested mappings and lists.

    Missing keys, out-of-range indices and non-indexable nodes resolve to None
    instead of raising.
    """
    current = data
    for step in path:
        if isinstance(current, Mapping):
            if step in current:
                current = current[step]
            elif step.isdecimal() and int(step) in current:
                current = current[int(step)]
            else:
                return None
        elif isinstance(current, (list, tuple)):
            if not step.isdecimal():
                return None
            index = int(step)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current
