"""Round-trip conversion between placeholder text and editable units.

The textual form ``{{key}}`` is the durable storage format. Units carry
transient presentation state (expanded flag, cached content and title) that
must never leak back into text, so exporting always emits exactly the key.
"""

import logging
from typing import Iterable, Mapping, Optional

from .models import (
    ImportedText,
    InvalidComponentKeyError,
    PlaceholderUnit,
    TextSegment,
)
from .syntax import PLACEHOLDER_PATTERN, format_placeholder, is_valid_component_key

logger = logging.getLogger(__name__)


def import_placeholder(text: str) -> Optional[PlaceholderUnit]:
    """
    Build a unit from a single matched placeholder.

    Args:
        text: Exactly one placeholder, e.g. "{{intro}}"

    Returns:
        A collapsed PlaceholderUnit with no cached content, or None if the
        text is not a single placeholder with a non-empty key
    """
    match = PLACEHOLDER_PATTERN.fullmatch(text)
    if not match:
        logger.warning(f"Not a placeholder, leaving as text: {text!r}")
        return None

    key = text[2:-2]
    if not key:
        logger.warning("Placeholder key is empty")
        return None

    return PlaceholderUnit(key=key)


def export_placeholder(unit: PlaceholderUnit) -> str:
    """Return the canonical text for a unit; presentation state is dropped."""
    return format_placeholder(unit.key)


def import_text(text: str) -> ImportedText:
    """
    Split a text buffer into plain runs and placeholder units.

    Args:
        text: Raw document content

    Returns:
        ImportedText whose segments concatenate back to the original text
        when exported
    """
    segments: list[TextSegment] = []
    position = 0

    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.start() > position:
            segments.append(text[position : match.start()])
        unit = import_placeholder(match.group(0))
        segments.append(unit if unit is not None else match.group(0))
        position = match.end()

    if position < len(text):
        segments.append(text[position:])

    return ImportedText(segments=segments)


def export_text(segments: Iterable[TextSegment]) -> str:
    """Serialize segments back to text, emitting units as ``{{key}}``."""
    parts = []
    for segment in segments:
        if isinstance(segment, PlaceholderUnit):
            parts.append(export_placeholder(segment))
        else:
            parts.append(segment)
    return "".join(parts)


def validate_component_key(key: str) -> str:
    """
    Validate and normalize a key typed during an interactive rename.

    Returns:
        The trimmed key

    Raises:
        InvalidComponentKeyError: If the key is empty or has disallowed characters
    """
    trimmed = (key or "").strip()
    if not trimmed:
        raise InvalidComponentKeyError(key, "key cannot be empty")
    if not is_valid_component_key(trimmed):
        raise InvalidComponentKeyError(
            key, "key can only contain letters, numbers, underscores, and dashes"
        )
    return trimmed


def rename_unit(unit: PlaceholderUnit, new_key: str) -> PlaceholderUnit:
    """
    Return a copy of ``unit`` pointing at ``new_key``.

    Only the renamed unit changes. Its cached resolution is discarded since
    it belonged to the old key.
    """
    trimmed = validate_component_key(new_key)
    if trimmed == unit.key:
        return unit
    return unit.model_copy(
        update={"key": trimmed, "resolved_content": None, "resolved_title": None}
    )


def rename_component(
    components: Mapping[str, str], old_key: str, new_key: str
) -> dict[str, str]:
    """
    Carry a mapping entry over to a renamed key.

    The old entry is kept, since other units may still use it; the new key
    is mapped to the same target. A key without a mapping produces an
    unchanged copy.

    Returns:
        A new components mapping
    """
    trimmed = validate_component_key(new_key)
    updated = dict(components)
    target = components.get(old_key)
    if target is not None and trimmed != old_key:
        updated[trimmed] = target
    return updated
