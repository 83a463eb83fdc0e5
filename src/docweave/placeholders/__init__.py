"""Placeholder syntax layer.

This module provides scanning of {{key}} placeholders in document content,
lossless round-tripping between text and editable placeholder units, and
allocation of fresh keys for newly created references.
"""

from .models import (
    PlaceholderOccurrence,
    PlaceholderUnit,
    TextSegment,
    ImportedText,
    InvalidComponentKeyError,
)
from .parser import PlaceholderScanner
from .serializer import (
    import_placeholder,
    export_placeholder,
    import_text,
    export_text,
    rename_unit,
    rename_component,
    validate_component_key,
)
from .keys import allocate_key, normalize_title

__all__ = [
    "PlaceholderOccurrence",
    "PlaceholderUnit",
    "TextSegment",
    "ImportedText",
    "InvalidComponentKeyError",
    "PlaceholderScanner",
    "import_placeholder",
    "export_placeholder",
    "import_text",
    "export_text",
    "rename_unit",
    "rename_component",
    "validate_component_key",
    "allocate_key",
    "normalize_title",
]
