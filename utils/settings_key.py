"""Renaming adapter between the two names of a component's settings bag.

Canonical layouts (defaults, value objects) call the bag ``settings``; the
storage boundary calls it ``props``. Both names carry the same data, so the
adapter only renames the key: order, ids and values pass through untouched.
"""
from typing import Any

SETTINGS_KEY = "settings"
PROPS_KEY = "props"


def rename_settings_key(entries: Any, source: str, target: str) -> Any:
    """Return a new list with ``source`` renamed to ``target`` in every entry.

    Non-list input, non-dict entries and entries lacking ``source`` are passed
    through as-is so structural validation downstream still sees the original shape.
    """
    if not isinstance(entries, list):
        return entries
    renamed: list[Any] = []
    for entry in entries:
        if isinstance(entry, dict) and source in entry and target not in entry:
            entry = {(target if key == source else key): value for key, value in entry.items()}
        renamed.append(entry)
    return renamed


def to_storage(entries: Any) -> Any:
    return rename_settings_key(entries, SETTINGS_KEY, PROPS_KEY)


def from_storage(entries: Any) -> Any:
    return rename_settings_key(entries, PROPS_KEY, SETTINGS_KEY)
