"""Resolver for mapping reference targets to concrete documents."""

import logging
from typing import TYPE_CHECKING, Mapping, Optional

from ..placeholders import PlaceholderScanner
from ..placeholders.syntax import GROUP_PREFIX, namespaced_key
from .models import (
    DirectTarget,
    Document,
    GroupTarget,
    ReferenceTarget,
    Resolution,
)
from .overrides import effective_override

if TYPE_CHECKING:
    from .snapshot import DocumentSnapshot

logger = logging.getLogger(__name__)


def parse_target(raw: str) -> Optional[ReferenceTarget]:
    """
    Parse an encoded component target.

    Encodings:
    - "group:<groupId>" - any member of the group
    - "group:<groupId>:<preferredTypeOrDocumentId>" - preferred member of the group
    - anything else - a document id

    Args:
        raw: The encoded target as stored in a document's components

    Returns:
        DirectTarget or GroupTarget, or None for an empty target
    """
    if not raw:
        return None

    if raw.startswith(GROUP_PREFIX):
        parts = raw.split(":")
        group_id = parts[1]
        preferred = parts[2] if len(parts) > 2 and parts[2] else None
        return GroupTarget(group_id=group_id, preferred=preferred)

    return DirectTarget(document_id=raw)


def parse_components(components: Optional[Mapping[str, str]]) -> dict[str, ReferenceTarget]:
    """Parse a components mapping, dropping empty targets."""
    parsed: dict[str, ReferenceTarget] = {}
    for key, raw in (components or {}).items():
        target = parse_target(raw)
        if target is None:
            logger.debug(f"Ignoring empty target for component '{key}'")
            continue
        parsed[key] = target
    return parsed


class TargetResolver:
    """Resolve reference targets against a document snapshot."""

    def __init__(self, snapshot: "DocumentSnapshot"):
        """
        Initialize the resolver.

        Args:
            snapshot: Loaded documents to resolve against
        """
        self.snapshot = snapshot
        self.scanner = PlaceholderScanner()

    def resolve(self, target: ReferenceTarget) -> Optional[Resolution]:
        """
        Resolve a target to a concrete document.

        Args:
            target: Parsed reference target

        Returns:
            Resolution naming the document used, or None if not found
        """
        if isinstance(target, DirectTarget):
            document = self.snapshot.get(target.document_id)
            if document is None:
                logger.debug(f"Document {target.document_id} not found")
                return None
            return Resolution(document=document, target=target)

        return self._resolve_group(target)

    def _resolve_group(self, target: GroupTarget) -> Optional[Resolution]:
        """Pick the preferred member of a group, else its first member."""
        members = self.snapshot.group_members(target.group_id)
        if not members:
            logger.debug(f"Group {target.group_id} has no members")
            return None

        if target.preferred:
            for member in members:
                if member.document_type == target.preferred:
                    return Resolution(document=member, target=target, preferred_matched=True)
            for member in members:
                if member.id == target.preferred:
                    return Resolution(document=member, target=target, preferred_matched=True)
            logger.debug(
                f"No member of group {target.group_id} matches '{target.preferred}', "
                f"using first member"
            )

        return Resolution(document=members[0], target=target)

    def resolve_override(self, document_id: str) -> Optional[Document]:
        """Overrides always name a concrete document id."""
        document = self.snapshot.get(document_id)
        if document is None:
            logger.warning(f"Override target {document_id} not found")
        return document

    def resolve_key(
        self,
        document: Document,
        key: str,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> Optional[Resolution]:
        """
        Resolve the document a placeholder key stands for within a document.

        Overrides take precedence over the document's own mapping.

        Args:
            document: The document whose content holds the placeholder
            key: The placeholder key
            overrides: Optional preset override map

        Returns:
            Resolution, or None if the key is unmapped or its target is missing
        """
        override_id = effective_override(namespaced_key(document.id, key), key, overrides)
        if override_id is not None:
            override_document = self.resolve_override(override_id)
            if override_document is not None:
                return Resolution(
                    document=override_document,
                    target=DirectTarget(document_id=override_id),
                )

        target = self.snapshot.targets_for(document).get(key)
        if target is None:
            return None
        return self.resolve(target)

    def unresolved_keys(self, document: Document) -> list[str]:
        """
        List placeholder keys in a document that do not resolve.

        A key is unresolved when it has no mapping or its target is missing.
        Keys are reported once each, in first occurrence order.
        """
        targets = self.snapshot.targets_for(document)
        unresolved: list[str] = []
        for key in self.scanner.keys(document.content or ""):
            if key in unresolved:
                continue
            target = targets.get(key)
            if target is None or self.resolve(target) is None:
                unresolved.append(key)
        return unresolved
