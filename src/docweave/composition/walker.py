"""Recursive walk over a composition, producing one record per placeholder."""

import logging
from typing import Iterator, Mapping, Optional

from ..placeholders import PlaceholderScanner
from ..placeholders.syntax import namespaced_key
from .models import Document, ResolutionRecord
from .overrides import effective_override
from .snapshot import DocumentSnapshot
from .targets import TargetResolver

logger = logging.getLogger(__name__)

# (record, document to descend into or None, ancestors of that document)
_Step = tuple[ResolutionRecord, Optional[Document], frozenset[str]]


class CompositionWalker:
    """Walk a document's placeholders depth-first, following composite targets."""

    def __init__(self, snapshot: DocumentSnapshot):
        """
        Initialize the walker.

        Args:
            snapshot: Loaded documents to walk over
        """
        self.snapshot = snapshot
        self.resolver = TargetResolver(snapshot)
        self.scanner = PlaceholderScanner()

    def walk(
        self,
        root_document_id: str,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> list[ResolutionRecord]:
        """
        Collect resolution records for every reachable placeholder.

        Records come out depth-first, in the order placeholders appear in
        each document's content. A branch stops when it would re-enter one
        of its own ancestors; sibling branches are explored independently.

        Args:
            root_document_id: Document to start from
            overrides: Optional preset override map (read only)

        Returns:
            List of ResolutionRecord objects; empty if the root is missing
        """
        root = self.snapshot.get(root_document_id)
        if root is None:
            logger.debug(f"Root document {root_document_id} not found")
            return []

        records: list[ResolutionRecord] = []
        stack: list[Iterator[_Step]] = [self._visit(root, frozenset(), overrides)]

        while stack:
            step = next(stack[-1], None)
            if step is None:
                stack.pop()
                continue

            record, child, ancestors = step
            records.append(record)
            if child is not None:
                stack.append(self._visit(child, ancestors, overrides))

        return records

    def _visit(
        self,
        document: Document,
        visited: frozenset[str],
        overrides: Optional[Mapping[str, str]],
    ) -> Iterator[_Step]:
        """Yield one step per resolvable placeholder occurrence in a document."""
        if document.id in visited:
            logger.debug(f"Circular reference to document {document.id}, not descending")
            return

        ancestors = visited | {document.id}

        if not document.is_composite or document.components is None:
            return

        targets = self.snapshot.targets_for(document)

        for occurrence in self.scanner.scan_all(document.content or ""):
            key = occurrence.key
            target = targets.get(key)
            if target is None:
                logger.debug(f"Placeholder '{key}' in {document.id} is unmapped")
                continue

            original = self.resolver.resolve(target)
            if original is None:
                logger.debug(f"Placeholder '{key}' in {document.id} does not resolve")
                continue

            ns_key = namespaced_key(document.id, key)
            override_id = effective_override(ns_key, key, overrides)
            override_document = (
                self.resolver.resolve_override(override_id) if override_id else None
            )

            record = ResolutionRecord(
                placeholder_key=key,
                namespaced_key=ns_key,
                source_document_id=document.id,
                source_document_title=document.title,
                original_document_id=original.document_id,
                original_document_title=original.document.title,
                override_document_id=override_id,
                override_document_title=override_document.title if override_document else None,
            )

            child = original.document if original.document.is_composite else None
            yield record, child, ancestors
