"""Reference suggestions for interactive placeholder completion."""

import logging
from typing import Iterable, Mapping, Optional

from ..placeholders import PlaceholderOccurrence, allocate_key
from ..placeholders.syntax import format_placeholder
from .models import (
    DirectTarget,
    Document,
    GroupTarget,
    ReferenceSuggestion,
    SuggestionKind,
)
from .snapshot import DocumentSnapshot
from .targets import parse_components

logger = logging.getLogger(__name__)

IMPORTED_PRIORITY = 1
ALIAS_PRIORITY = 5
TITLE_PRIORITY = 10
TYPE_PRIORITY = 20


def _aliases(document: Document) -> list[str]:
    if not document.alias:
        return []
    return [a.strip() for a in document.alias.split(",") if a.strip()]


def _referenced_ids(components: Mapping[str, str]) -> set[str]:
    """Document and group ids the current components already point at."""
    referenced = set()
    for target in parse_components(components).values():
        if isinstance(target, DirectTarget):
            referenced.add(target.document_id)
        elif isinstance(target, GroupTarget):
            referenced.add(target.group_id)
            if target.preferred:
                referenced.add(target.preferred)
    return referenced


def suggest_references(
    query: str,
    snapshot: DocumentSnapshot,
    current_components: Optional[Mapping[str, str]] = None,
    current_document_id: Optional[str] = None,
    limit: int = 10,
) -> list[ReferenceSuggestion]:
    """
    Find group heads matching a partially typed placeholder.

    Matching is a case-insensitive substring test on title, aliases and
    document type. Documents already referenced by the current components
    rank first, then alias matches, title matches and type matches.

    Args:
        query: Text typed after "{{"
        snapshot: Loaded documents
        current_components: Components of the document being edited
        current_document_id: Document being edited; never suggested
        limit: Maximum number of suggestions

    Returns:
        Suggestions sorted by priority, then title
    """
    needle = query.strip().lower()
    referenced = _referenced_ids(current_components or {})
    suggestions: list[ReferenceSuggestion] = []

    for document in snapshot:
        if document.id == current_document_id or not document.is_group_head:
            continue

        priority = None
        if document.document_type and needle in document.document_type.lower():
            priority = TYPE_PRIORITY
        if needle in document.title.lower():
            priority = TITLE_PRIORITY
        if any(needle in alias.lower() for alias in _aliases(document)):
            priority = ALIAS_PRIORITY
        if priority is None:
            continue

        kind = SuggestionKind.GROUP_HEAD
        if document.id in referenced:
            kind = SuggestionKind.IMPORTED
            priority = IMPORTED_PRIORITY

        suggestions.append(
            ReferenceSuggestion(
                id=document.id,
                title=document.title,
                kind=kind,
                group_id=document.group_id,
                document_type=document.document_type,
                alias=document.alias,
                priority=priority,
            )
        )

    suggestions.sort(key=lambda s: (s.priority, s.title.lower()))
    logger.debug(f"{len(suggestions)} suggestion(s) for '{query}'")
    return suggestions[:limit]


def group_target_value(document: Document) -> str:
    """
    Encode the component target written when a suggestion is accepted.

    Grouped documents are targeted through their group, so the reference
    can later be switched to a sibling variant. Ungrouped documents have no
    variants and are referenced directly.
    """
    if document.group_id is None:
        return DirectTarget(document_id=document.id).encode()
    return GroupTarget(group_id=document.group_id, preferred=document.id).encode()


def allocate_key_for(document: Document, existing_keys: Iterable[str]) -> str:
    """Allocate a key from the document's first alias, else its title."""
    aliases = _aliases(document)
    return allocate_key(aliases[0] if aliases else document.title, existing_keys)


def complete_placeholder(
    text: str, occurrence: PlaceholderOccurrence, key: str
) -> tuple[str, int]:
    """
    Replace a (possibly partial) placeholder with ``{{key}}``.

    Args:
        text: The buffer being edited
        occurrence: Occurrence returned by PlaceholderScanner.find_at_cursor
        key: Key of the accepted reference

    Returns:
        The new text and the cursor offset just past the inserted placeholder
    """
    placeholder = format_placeholder(key)
    new_text = text[: occurrence.start] + placeholder + text[occurrence.end :]
    return new_text, occurrence.start + len(placeholder)
