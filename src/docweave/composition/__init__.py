"""Component reference resolution and composition.

Resolves {{key}} references through group indirection and preset override
layers, walks nested composite documents without looping on cycles, and
renders composed content.
"""

from .models import (
    Document,
    DirectTarget,
    GroupTarget,
    ReferenceTarget,
    Resolution,
    ResolutionRecord,
    ReferenceSuggestion,
    SuggestionKind,
    Preset,
    DocumentNotFoundError,
)
from .targets import TargetResolver, parse_target, parse_components
from .overrides import effective_override, set_override, clear_override, collect_overrides
from .snapshot import DocumentSnapshot
from .walker import CompositionWalker
from .expander import ContentExpander
from .suggestions import (
    suggest_references,
    group_target_value,
    allocate_key_for,
    complete_placeholder,
)

__all__ = [
    "Document",
    "DirectTarget",
    "GroupTarget",
    "ReferenceTarget",
    "Resolution",
    "ResolutionRecord",
    "ReferenceSuggestion",
    "SuggestionKind",
    "Preset",
    "DocumentNotFoundError",
    "TargetResolver",
    "parse_target",
    "parse_components",
    "effective_override",
    "set_override",
    "clear_override",
    "collect_overrides",
    "DocumentSnapshot",
    "CompositionWalker",
    "ContentExpander",
    "suggest_references",
    "group_target_value",
    "allocate_key_for",
    "complete_placeholder",
]
