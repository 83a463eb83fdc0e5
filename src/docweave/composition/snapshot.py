"""Immutable, indexed view over a loaded set of documents."""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from .models import Document, DocumentNotFoundError, ReferenceTarget
from .targets import parse_components

logger = logging.getLogger(__name__)


class DocumentSnapshot:
    """Documents, group memberships and parsed component targets.

    Component targets are parsed once here; the rest of the engine works on
    the parsed values and never touches the encoded strings again.
    """

    def __init__(self, documents: Iterable[Document]):
        self._documents: tuple[Document, ...] = tuple(documents)
        self._by_id: dict[str, Document] = {}
        self._groups: dict[str, list[Document]] = {}
        self._targets: dict[str, Mapping[str, ReferenceTarget]] = {}

        for document in self._documents:
            if document.id in self._by_id:
                logger.warning(f"Duplicate document id {document.id}, keeping first")
                continue
            self._by_id[document.id] = document
            if document.group_id is not None:
                self._groups.setdefault(document.group_id, []).append(document)
            self._targets[document.id] = MappingProxyType(
                parse_components(document.components)
            )

    @classmethod
    def from_json(cls, data: Any) -> "DocumentSnapshot":
        """
        Build a snapshot from decoded JSON.

        Accepts either a list of documents or an object with a "documents" list.
        """
        if isinstance(data, dict):
            data = data.get("documents", [])
        return cls(Document.model_validate(item) for item in data)

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._by_id

    def get(self, document_id: str) -> Optional[Document]:
        return self._by_id.get(document_id)

    def require(self, document_id: str) -> Document:
        """Get a document, raising DocumentNotFoundError if absent."""
        document = self._by_id.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    def group_members(self, group_id: str) -> list[Document]:
        """Members of a group, in snapshot order."""
        return list(self._groups.get(group_id, ()))

    def targets_for(self, document: Document) -> Mapping[str, ReferenceTarget]:
        """
        Parsed component targets of a document.

        Documents from this snapshot use the targets parsed at load time;
        any other document (e.g. an unsaved edit) is parsed on the spot.
        """
        if self._by_id.get(document.id) is document:
            return self._targets[document.id]
        return MappingProxyType(parse_components(document.components))
