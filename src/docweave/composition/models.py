"""Data models for component reference resolution."""

from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A document as loaded from the store; treated as an immutable snapshot."""

    id: str
    title: str = ""
    group_id: Optional[str] = None  # Group head when group_id == id
    document_type: Optional[str] = None  # Free-form tag used for preferred-type selection
    alias: Optional[str] = None  # Comma-separated alternative names
    content: Optional[str] = None
    is_composite: bool = False
    components: Optional[dict[str, str]] = None  # placeholder key -> encoded target

    @property
    def is_group_head(self) -> bool:
        return self.group_id is None or self.group_id == self.id


class DirectTarget(BaseModel):
    """Reference to one specific document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["direct"] = "direct"
    document_id: str

    def encode(self) -> str:
        return self.document_id


class GroupTarget(BaseModel):
    """Reference to a group; resolution picks one concrete member."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    group_id: str
    preferred: Optional[str] = None  # Preferred document_type, or a member id

    def encode(self) -> str:
        if self.preferred:
            return f"group:{self.group_id}:{self.preferred}"
        return f"group:{self.group_id}"


ReferenceTarget = Union[DirectTarget, GroupTarget]


class Resolution(BaseModel):
    """Outcome of resolving a reference target to a concrete document."""

    document: Document
    target: ReferenceTarget  # The target that was resolved
    preferred_matched: bool = False  # A group's preferred type/id selected the member

    @property
    def document_id(self) -> str:
        """Concrete id actually used; canonical for recursion and namespacing."""
        return self.document.id


class ResolutionRecord(BaseModel):
    """One placeholder occurrence discovered while walking a composition."""

    placeholder_key: str
    namespaced_key: str  # "<source_document_id>.<placeholder_key>"
    source_document_id: str
    source_document_title: str
    original_document_id: str  # Resolved target before overrides
    original_document_title: str
    override_document_id: Optional[str] = None
    override_document_title: Optional[str] = None

    @property
    def effective_document_id(self) -> str:
        return self.override_document_id or self.original_document_id

    @property
    def has_override(self) -> bool:
        return self.override_document_id is not None


class SuggestionKind(str, Enum):
    """Why a document was offered as a reference."""

    GROUP_HEAD = "grouphead"  # Any group head matching the query
    IMPORTED = "imported"  # Already referenced by the document being edited


class ReferenceSuggestion(BaseModel):
    """A candidate document offered while typing a placeholder."""

    id: str
    title: str
    kind: SuggestionKind
    group_id: Optional[str] = None
    document_type: Optional[str] = None
    alias: Optional[str] = None
    priority: int  # Lower number = higher priority


class Preset(BaseModel):
    """A named rendering of a document with placeholder overrides."""

    id: str
    name: str
    document_id: Optional[str] = None
    component_overrides: dict[str, str] = Field(default_factory=dict)


class DocumentNotFoundError(Exception):
    """Exception raised when a required document is not in the snapshot."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found in snapshot")
