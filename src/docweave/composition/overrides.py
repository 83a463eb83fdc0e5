"""Preset override layer.

Override maps are keyed either by a bare placeholder key (applies wherever
that key occurs) or by "<sourceDocumentId>.<placeholderKey>" (applies to one
occurrence only). Namespaced entries always win over bare ones.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from .models import ResolutionRecord

if TYPE_CHECKING:
    from .snapshot import DocumentSnapshot

logger = logging.getLogger(__name__)


def effective_override(
    namespaced_key: str,
    key: str,
    overrides: Optional[Mapping[str, str]],
) -> Optional[str]:
    """
    Look up the override that applies to one placeholder occurrence.

    Args:
        namespaced_key: "<sourceDocumentId>.<key>" for the occurrence
        key: The bare placeholder key
        overrides: Override map, or None

    Returns:
        The overriding document id, or None if the document's own mapping applies
    """
    if not overrides:
        return None
    return overrides.get(namespaced_key) or overrides.get(key) or None


def set_override(
    records: Iterable[ResolutionRecord],
    namespaced_key: str,
    document_id: str,
    snapshot: "DocumentSnapshot",
) -> list[ResolutionRecord]:
    """
    Point one occurrence at a different document.

    Returns:
        A new record list; the given records are not modified
    """
    document = snapshot.get(document_id)
    if document is None:
        logger.warning(f"Override target {document_id} not found in snapshot")

    return [
        record.model_copy(
            update={
                "override_document_id": document_id,
                "override_document_title": document.title if document else None,
            }
        )
        if record.namespaced_key == namespaced_key
        else record
        for record in records
    ]


def clear_override(
    records: Iterable[ResolutionRecord], namespaced_key: str
) -> list[ResolutionRecord]:
    """Drop the override of one occurrence, returning a new record list."""
    return [
        record.model_copy(
            update={"override_document_id": None, "override_document_title": None}
        )
        if record.namespaced_key == namespaced_key
        else record
        for record in records
    ]


def collect_overrides(records: Iterable[ResolutionRecord]) -> dict[str, str]:
    """
    Build the override map to persist for a preset.

    Every overridden occurrence is stored under its namespaced key, so an
    edit to one occurrence never leaks to another.
    """
    return {
        record.namespaced_key: record.override_document_id
        for record in records
        if record.override_document_id
    }
