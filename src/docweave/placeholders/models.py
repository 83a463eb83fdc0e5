"""Data models for the placeholder layer."""

from typing import Optional, Union
from pydantic import BaseModel, Field


class PlaceholderOccurrence(BaseModel):
    """A placeholder found in a text buffer."""

    key: str  # Interior text (e.g., "intro" for "{{intro}}")
    start: int  # Offset of the opening "{{"
    end: int  # Offset just past the closing "}}" (or the cursor, if incomplete)
    is_complete: bool = True  # False while the user is still typing inside "{{"

    @property
    def syntax(self) -> str:
        """Canonical textual form of this occurrence's key."""
        return "{{" + self.key + "}}"


class PlaceholderUnit(BaseModel):
    """Editable inline unit standing in for a placeholder.

    Only ``key`` is durable. The remaining fields are presentation state held
    by an editor and are never written back into text.
    """

    key: str
    resolved_content: Optional[str] = None  # Cached content of the resolved document
    resolved_title: Optional[str] = None  # Cached title of the resolved document
    is_expanded: bool = False


# A text buffer imported for editing: plain runs interleaved with units
TextSegment = Union[str, PlaceholderUnit]


class ImportedText(BaseModel):
    """Result of importing a whole text buffer."""

    segments: list[TextSegment] = Field(default_factory=list)

    @property
    def units(self) -> list[PlaceholderUnit]:
        return [s for s in self.segments if isinstance(s, PlaceholderUnit)]


class InvalidComponentKeyError(ValueError):
    """Raised when an interactive rename supplies an unusable key."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid component key '{key}': {reason}")
