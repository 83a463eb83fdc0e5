"""API routes for docweave.

Every endpoint is stateless: callers send the document snapshot (and any
preset overrides) with the request and receive pure results back.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..composition import (
    CompositionWalker,
    ContentExpander,
    Document,
    DocumentNotFoundError,
    DocumentSnapshot,
    Preset,
    TargetResolver,
    collect_overrides,
    suggest_references,
)
from ..config import settings
from ..placeholders import (
    PlaceholderScanner,
    PlaceholderUnit,
    allocate_key,
    export_text,
    import_text,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_snapshot(documents: list[Document]) -> DocumentSnapshot:
    """Index request documents, enforcing the configured size limit."""
    if len(documents) > settings.max_snapshot_documents:
        raise HTTPException(
            status_code=413,
            detail=f"Snapshot has {len(documents)} documents; "
            f"limit is {settings.max_snapshot_documents}",
        )
    return DocumentSnapshot(documents)


class TextRequest(BaseModel):
    """Request carrying a text buffer."""

    text: str


class CursorRequest(BaseModel):
    """Request to locate the placeholder under a cursor."""

    text: str
    cursor: int = Field(ge=0)


class AllocateKeyRequest(BaseModel):
    """Request for a fresh placeholder key."""

    title: str
    existing_keys: list[str] = Field(default_factory=list)


class SnapshotRequest(BaseModel):
    """Base request carrying a document snapshot."""

    documents: list[Document] = Field(default_factory=list)


class ComposeRequest(SnapshotRequest):
    """Request to walk or expand a composition."""

    root_document_id: str
    overrides: dict[str, str] = Field(default_factory=dict)


class ResolveKeyRequest(SnapshotRequest):
    """Request to resolve one placeholder key within a document."""

    document_id: str
    key: str
    overrides: dict[str, str] = Field(default_factory=dict)


class SuggestRequest(SnapshotRequest):
    """Request for reference suggestions while typing."""

    query: str
    current_components: dict[str, str] = Field(default_factory=dict)
    current_document_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class PresetOverridesRequest(SnapshotRequest):
    """Request for the override-editing view of a preset."""

    preset: Preset


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "docweave",
        "config": {
            "autocomplete_limit": settings.autocomplete_limit,
            "max_snapshot_documents": settings.max_snapshot_documents,
        },
    }


# ========== Placeholder Endpoints ==========


@router.post("/placeholders/scan")
async def scan_placeholders(request: TextRequest):
    """Extract all complete placeholders from a text buffer."""
    occurrences = PlaceholderScanner().scan_all(request.text)
    return {
        "placeholders": [o.model_dump() for o in occurrences],
        "count": len(occurrences),
    }


@router.post("/placeholders/cursor")
async def placeholder_at_cursor(request: CursorRequest):
    """Find the (possibly unterminated) placeholder under the cursor."""
    occurrence = PlaceholderScanner().find_at_cursor(request.text, request.cursor)
    return {"placeholder": occurrence.model_dump() if occurrence else None}


@router.post("/placeholders/allocate-key")
async def allocate_placeholder_key(request: AllocateKeyRequest):
    """Derive a fresh, collision-free key from a title."""
    return {"key": allocate_key(request.title, request.existing_keys)}


@router.post("/placeholders/roundtrip")
async def roundtrip_placeholders(request: TextRequest):
    """
    Import text into editable units and export it back.

    The exported text is byte-identical to the input.
    """
    imported = import_text(request.text)
    return {
        "segments": [
            {"unit": s.model_dump()} if isinstance(s, PlaceholderUnit) else {"text": s}
            for s in imported.segments
        ],
        "text": export_text(imported.segments),
    }


# ========== Composition Endpoints ==========


@router.post("/compose/walk")
async def walk_composition(request: ComposeRequest):
    """
    Walk a composition and list every placeholder occurrence.

    Returns:
    - Ordered resolution records (depth-first, content order)
    """
    snapshot = _load_snapshot(request.documents)
    try:
        snapshot.require(request.root_document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    records = CompositionWalker(snapshot).walk(request.root_document_id, request.overrides)
    return {
        "root_document_id": request.root_document_id,
        "records": [r.model_dump() for r in records],
        "count": len(records),
    }


@router.post("/compose/expand")
async def expand_composition(request: ComposeRequest):
    """Render the composed text of a document with overrides applied."""
    snapshot = _load_snapshot(request.documents)
    try:
        snapshot.require(request.root_document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    content = ContentExpander(snapshot).expand(request.root_document_id, request.overrides)
    return {"root_document_id": request.root_document_id, "content": content}


@router.post("/compose/resolve")
async def resolve_key(request: ResolveKeyRequest):
    """Resolve the document a single placeholder key stands for."""
    snapshot = _load_snapshot(request.documents)
    try:
        document = snapshot.require(request.document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    resolver = TargetResolver(snapshot)
    resolution = resolver.resolve_key(document, request.key, request.overrides)
    return {
        "key": request.key,
        "resolved": resolution is not None,
        "document": resolution.document.model_dump() if resolution else None,
        "unresolved_keys": resolver.unresolved_keys(document),
    }


@router.post("/compose/suggest")
async def suggest(request: SuggestRequest):
    """Suggest documents to reference for a partially typed placeholder."""
    snapshot = _load_snapshot(request.documents)
    suggestions = suggest_references(
        request.query,
        snapshot,
        current_components=request.current_components,
        current_document_id=request.current_document_id,
        limit=request.limit or settings.autocomplete_limit,
    )
    return {"suggestions": [s.model_dump() for s in suggestions]}


# ========== Preset Endpoints ==========


@router.post("/presets/overrides")
async def preset_overrides(request: PresetOverridesRequest):
    """
    Build the override-editing view of a preset.

    Returns:
    - Every placeholder occurrence reachable from the preset's document
    - The override map in its persisted (namespaced) form
    """
    preset = request.preset
    if not preset.document_id:
        return {"preset_id": preset.id, "records": [], "overrides": {}}

    snapshot = _load_snapshot(request.documents)
    records = CompositionWalker(snapshot).walk(
        preset.document_id, preset.component_overrides
    )
    logger.info(f"Preset {preset.id}: {len(records)} overridable placeholder(s)")
    return {
        "preset_id": preset.id,
        "records": [r.model_dump() for r in records],
        "overrides": collect_overrides(records),
    }
