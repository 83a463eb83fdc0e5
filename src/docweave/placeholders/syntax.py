"""Placeholder syntax definitions and patterns."""

import re
from typing import Pattern

OPEN = "{{"
CLOSE = "}}"

# {{key}} - key is any run of characters other than "}"
PLACEHOLDER_PATTERN: Pattern = re.compile(r"\{\{([^}]+)\}\}")

# Keys accepted from an interactive rename
COMPONENT_KEY_PATTERN: Pattern = re.compile(r"^[A-Za-z0-9_-]+$")

# Keys produced by the key allocator
ALLOCATED_KEY_PATTERN: Pattern = re.compile(r"^[a-z][a-z0-9_]*$")

# Prefix marking a group reference target
GROUP_PREFIX = "group:"


def format_placeholder(key: str) -> str:
    """Return the canonical textual form of a placeholder key."""
    return f"{OPEN}{key}{CLOSE}"


def namespaced_key(source_document_id: str, key: str) -> str:
    """
    Build the override key addressing one placeholder occurrence.

    Args:
        source_document_id: Id of the document whose content holds the placeholder
        key: The placeholder key

    Returns:
        "<source_document_id>.<key>"
    """
    return f"{source_document_id}.{key}"


def is_valid_component_key(key: str) -> bool:
    """
    Check if a key is acceptable for an interactive rename.

    Valid keys:
    - Must not be empty after trimming
    - May only contain letters, digits, underscores and dashes

    Args:
        key: The candidate key

    Returns:
        True if valid, False otherwise
    """
    if not key or not key.strip():
        return False
    return bool(COMPONENT_KEY_PATTERN.match(key.strip()))
