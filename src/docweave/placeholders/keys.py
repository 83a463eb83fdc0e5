"""Allocation of fresh placeholder keys from human-readable titles."""

import re
from typing import Iterable

_DISALLOWED = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_UNDERSCORES = re.compile(r"_+")

FALLBACK_KEY = "doc"


def normalize_title(title: str) -> str:
    """
    Normalize a title into a key base.

    Lowercases, drops characters outside [a-z0-9 whitespace], turns whitespace
    runs into underscores and trims/collapses underscores. The result may be
    empty or start with a digit.
    """
    base = _DISALLOWED.sub("", (title or "").lower())
    base = _WHITESPACE.sub("_", base)
    base = base.strip("_")
    return _UNDERSCORES.sub("_", base)


def allocate_key(title: str, existing_keys: Iterable[str]) -> str:
    """
    Derive a collision-free placeholder key from a title.

    Args:
        title: Human-readable title of the referenced document
        existing_keys: Keys already used by the document being edited

    Returns:
        A non-empty key matching ^[a-z][a-z0-9_]*$ that is not in existing_keys
    """
    taken = set(existing_keys)

    base = normalize_title(title)
    if not base:
        base = FALLBACK_KEY
    elif not base[0].isalpha():
        base = f"doc_{base}"

    key = base
    counter = 1
    while key in taken:
        key = f"{base}_{counter}"
        counter += 1
    return key
