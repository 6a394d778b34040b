"""Mutual exclusivity keys recorded in the run context.

An action carrying a key runs at most once per run: the first action with the
key registers it, later actions with the same key are skipped.
"""

from __future__ import annotations

from bf.core.context import Context

MUTUAL_EXCLUSIVITY_KEYS_KEY = "mutual_exclusivity_keys"


def executed_keys(context: Context) -> set[str]:
    return set(context.get(MUTUAL_EXCLUSIVITY_KEYS_KEY, set) or ())


def is_key_executed(context: Context, key: str) -> bool:
    return key in executed_keys(context)


def register_key(context: Context, key: str) -> None:
    keys = executed_keys(context)
    keys.add(key)
    context.put(MUTUAL_EXCLUSIVITY_KEYS_KEY, keys)
