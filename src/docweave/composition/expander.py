"""Render the fully composed text of a document."""

import logging
import re
from typing import Mapping, Optional

from ..placeholders.syntax import PLACEHOLDER_PATTERN
from .models import Document
from .snapshot import DocumentSnapshot
from .targets import TargetResolver

logger = logging.getLogger(__name__)


class ContentExpander:
    """Replace placeholders with the content of the documents they resolve to.

    Unlike the walker, the expander renders what a preset shows: an override
    replaces the mapped target and is itself expanded when composite.
    Placeholders that do not resolve, or that would re-enter an ancestor,
    are left in the text unchanged.
    """

    def __init__(self, snapshot: DocumentSnapshot):
        self.snapshot = snapshot
        self.resolver = TargetResolver(snapshot)

    def expand(
        self,
        root_document_id: str,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Expand a document from the snapshot.

        Args:
            root_document_id: Document to render
            overrides: Optional preset override map

        Returns:
            Composed text; empty if the document is missing
        """
        root = self.snapshot.get(root_document_id)
        if root is None:
            logger.debug(f"Root document {root_document_id} not found")
            return ""
        return self._expand(root, frozenset(), overrides)

    def expand_text(
        self,
        text: str,
        document: Document,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Expand an arbitrary text buffer in the context of a document.

        Useful for previewing unsaved edits: ``document`` supplies the
        components mapping and the namespace for overrides.
        """
        if document.components is None:
            return text
        return self._expand_content(text, document, frozenset({document.id}), overrides)

    def _expand(
        self,
        document: Document,
        visited: frozenset[str],
        overrides: Optional[Mapping[str, str]],
    ) -> str:
        content = document.content or ""
        if not document.is_composite or document.components is None:
            return content
        return self._expand_content(content, document, visited | {document.id}, overrides)

    def _expand_content(
        self,
        content: str,
        document: Document,
        visited: frozenset[str],
        overrides: Optional[Mapping[str, str]],
    ) -> str:
        def replace(match: re.Match) -> str:
            key = match.group(1)
            resolution = self.resolver.resolve_key(document, key, overrides)
            if resolution is None:
                return match.group(0)

            target = resolution.document
            if target.id in visited:
                logger.warning(f"Circular reference detected for document {target.id}")
                return match.group(0)

            return self._expand(target, visited, overrides)

        return PLACEHOLDER_PATTERN.sub(replace, content)
