"""Scanner for extracting placeholders from document content."""

import logging
from typing import Optional

from .models import PlaceholderOccurrence
from .syntax import CLOSE, OPEN, PLACEHOLDER_PATTERN

logger = logging.getLogger(__name__)


class PlaceholderScanner:
    """Find {{key}} placeholders in raw text."""

    def scan_all(self, text: str) -> list[PlaceholderOccurrence]:
        """
        Extract all complete placeholders from a text buffer.

        Matches are non-overlapping and reported left to right.

        Args:
            text: The text to scan

        Returns:
            List of PlaceholderOccurrence objects, ordered by start offset
        """
        if not text:
            return []

        occurrences = [
            PlaceholderOccurrence(key=match.group(1), start=match.start(), end=match.end())
            for match in PLACEHOLDER_PATTERN.finditer(text)
        ]
        if occurrences:
            logger.debug(f"Found {len(occurrences)} placeholder(s)")
        return occurrences

    def keys(self, text: str) -> list[str]:
        """Return the keys of all complete placeholders, in occurrence order."""
        return [occurrence.key for occurrence in self.scan_all(text)]

    def find_at_cursor(self, text: str, cursor: int) -> Optional[PlaceholderOccurrence]:
        """
        Find the placeholder the cursor currently sits in, if any.

        Scans backward from the cursor for the nearest "{{". Whitespace or a
        "}}" met first ends the search. From the opening found, scans forward
        for "}}" (stopping at another "{{"). A closed placeholder is complete
        and keyed by its trimmed interior; an unclosed one is incomplete and
        keyed by the trimmed text between "{{" and the cursor.

        Args:
            text: The text buffer being edited
            cursor: Cursor offset into the buffer

        Returns:
            PlaceholderOccurrence, or None if the cursor is not in a placeholder
        """
        cursor = max(0, min(cursor, len(text)))

        open_start = -1
        for i in range(cursor - 1, -1, -1):
            pair = text[i : i + 2]
            if pair == OPEN:
                open_start = i
                break
            if pair == CLOSE:
                break
            if text[i].isspace():
                break

        if open_start == -1:
            return None

        close_end = -1
        for i in range(open_start + 2, len(text)):
            pair = text[i : i + 2]
            if pair == CLOSE:
                close_end = i + 2
                break
            if pair == OPEN:
                break

        if close_end != -1 and cursor > close_end:
            return None

        if close_end != -1:
            return PlaceholderOccurrence(
                key=text[open_start + 2 : close_end - 2].strip(),
                start=open_start,
                end=close_end,
                is_complete=True,
            )

        return PlaceholderOccurrence(
            key=text[open_start + 2 : cursor].strip(),
            start=open_start,
            end=cursor,
            is_complete=False,
        )
