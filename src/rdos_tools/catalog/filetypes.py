"""
RDOS File Type Classification
=============================

RDOS marks each file with a single letter at offset $18 of its catalog
entry. This module maps that letter to a content kind and recommends how
the content should be decoded for display.

Type Markers
------------
- 'A': Applesoft BASIC program
- 'I': Integer BASIC program
- 'T': Text file
- 'B': Binary file (machine code or a graphics screen dump)
- anything else: unclassified

Graphics Detection
------------------
The format has no graphics flag, so binary files are guessed from their
length. A hi-res screen is 8192 bytes and a double hi-res screen 16384
bytes; images are often saved a few bytes short because the last 8 bytes
of the screen memory are unused. The ranges below are a best guess kept
for compatibility with existing tools, not a format guarantee:

- 8185..8192 bytes   -> color hi-res graphics
- 16377..16384 bytes -> double hi-res color graphics
- anything else      -> generic binary

Classification never fails. Unknown markers fall back to UNCLASSIFIED
with the generic binary hint.
"""

from dataclasses import dataclass
from enum import Enum

from rdos_tools.catalog.entry import DirectoryEntry


# =============================================================================
# Enumeration Types
# =============================================================================

class ContentKind(Enum):
    """Semantic content of a file, derived from its type marker."""
    APPLESOFT_PROGRAM = "A"
    INTEGER_BASIC_PROGRAM = "I"
    TEXT_DOCUMENT = "T"
    BINARY_OR_GRAPHICS = "B"
    UNCLASSIFIED = "?"

    @classmethod
    def from_marker(cls, marker: str) -> "ContentKind":
        """Convert a type marker to a ContentKind, never raising."""
        try:
            return cls(marker)
        except ValueError:
            return cls.UNCLASSIFIED

    def get_description(self) -> str:
        """Get a human-readable description of the content kind."""
        descriptions = {
            ContentKind.APPLESOFT_PROGRAM: "Applesoft BASIC",
            ContentKind.INTEGER_BASIC_PROGRAM: "Integer BASIC",
            ContentKind.TEXT_DOCUMENT: "Text",
            ContentKind.BINARY_OR_GRAPHICS: "Binary",
            ContentKind.UNCLASSIFIED: "Unclassified",
        }
        return descriptions[self]


class FilterHint(Enum):
    """
    Recommended decoder for a file's content.

    This is advice for the presentation layer, which owns the actual
    conversion to text or images.
    """
    APPLESOFT_BASIC = "applesoft basic"
    INTEGER_BASIC = "integer basic"
    TEXT = "text"
    HIRES_COLOR = "color hi-res graphics"
    DOUBLE_HIRES_COLOR = "double hi-res color graphics"
    BINARY = "generic binary"


# Inclusive byte-length ranges used to spot graphics screen dumps
HIRES_LENGTH_RANGE = (8185, 8192)
DOUBLE_HIRES_LENGTH_RANGE = (16377, 16384)

_KIND_HINTS = {
    ContentKind.APPLESOFT_PROGRAM: FilterHint.APPLESOFT_BASIC,
    ContentKind.INTEGER_BASIC_PROGRAM: FilterHint.INTEGER_BASIC,
    ContentKind.TEXT_DOCUMENT: FilterHint.TEXT,
    ContentKind.UNCLASSIFIED: FilterHint.BINARY,
}


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying a directory entry.

    Unpacks like a (kind, hint) pair:

        >>> kind, hint = classify(entry)
    """
    kind: ContentKind
    hint: FilterHint

    def __iter__(self):
        return iter((self.kind, self.hint))

    @property
    def is_graphics(self) -> bool:
        """True if the hint suggests a graphics screen dump."""
        return self.hint in (FilterHint.HIRES_COLOR, FilterHint.DOUBLE_HIRES_COLOR)


# =============================================================================
# Classification
# =============================================================================

def content_kind(file_type: str) -> ContentKind:
    """Map a type marker character to its ContentKind."""
    return ContentKind.from_marker(file_type)


def _binary_hint(byte_length: int) -> FilterHint:
    low, high = HIRES_LENGTH_RANGE
    if low <= byte_length <= high:
        return FilterHint.HIRES_COLOR
    low, high = DOUBLE_HIRES_LENGTH_RANGE
    if low <= byte_length <= high:
        return FilterHint.DOUBLE_HIRES_COLOR
    return FilterHint.BINARY


def classify(entry: DirectoryEntry) -> Classification:
    """
    Classify a directory entry.

    Args:
        entry: A decoded directory entry

    Returns:
        Classification with the content kind and the recommended filter hint

    Example:
        >>> kind, hint = classify(entry)
        >>> if hint is FilterHint.HIRES_COLOR:
        ...     show_picture(data)
    """
    kind = content_kind(entry.file_type)
    if kind is ContentKind.BINARY_OR_GRAPHICS:
        hint = _binary_hint(entry.byte_length)
    else:
        hint = _KIND_HINTS[kind]
    return Classification(kind=kind, hint=hint)
