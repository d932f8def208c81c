"""Shared helpers for HookBridge."""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay one config layer onto another and return a new dict.

    Nested objects merge key by key. Anything else in ``override``, lists
    included, replaces the base value, so a local ``failure_keywords`` list
    fully replaces the default one.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
