"""
RDOS Directory Entry Codec
==========================

This module decodes the fixed-size directory records used by RDOS, the
disk operating system shipped with SSI games for the Apple II.

Record Format
-------------
Every catalog entry occupies exactly 32 bytes:

    Offset   Size  Description
    ------   ----  -----------
    $00-$17  24    File name, space-filled
    $18      1     File type (a letter: 'A', 'I', 'T', 'B')
    $19      1     File length in blocks (block = sector = 256 bytes)
    $1A-$1B  2     Load address (little-endian), for Applesoft and binary
    $1C-$1D  2     File length in bytes (little-endian)
    $1E-$1F  2     Starting block (little-endian)

The first byte of the name doubles as a status marker:

- $00: end of the directory; this is not an entry at all
- $80: the file is deleted, the rest of the record is stale

Text is stored in Apple II "high ASCII" (bit 7 set), so the decoder masks
bit 7 off before turning bytes into characters.

There is no checksum and no cross-field validation: every numeric field
is read independently from its fixed offset.

Usage
-----
    >>> from rdos_tools.catalog import decode_entry
    >>> entry = decode_entry(raw_32_bytes)
    >>> print(entry.display_name, entry.file_type, entry.byte_length)
"""

from dataclasses import dataclass
import struct

from rdos_tools.errors import MalformedRecordError


# =============================================================================
# Record Layout Constants
# =============================================================================

ENTRY_SIZE = 32
FILENAME_LENGTH = 24

OFFSET_FILENAME = 0x00
OFFSET_FILE_TYPE = 0x18
OFFSET_SIZE_IN_BLOCKS = 0x19
OFFSET_ADDRESS = 0x1A
OFFSET_BYTE_LENGTH = 0x1C
OFFSET_STARTING_BLOCK = 0x1E

END_OF_DIRECTORY = 0x00
DELETED_MARKER = 0x80

# Reported in place of the stale name of a deleted file
DELETED_FILENAME = "<NOT IN USE>".ljust(FILENAME_LENGTH)

# Bytes per block; entries count their allocation in these units
BLOCK_SIZE = 256

_WORD = struct.Struct("<H")


# =============================================================================
# Byte Helpers
# =============================================================================

def _apple_text(data: bytes) -> str:
    """Convert Apple II text bytes to a string, ignoring the high bit."""
    return "".join(chr(b & 0x7F) for b in data)


def _word(raw: bytes, offset: int) -> int:
    """Read an unsigned little-endian 16-bit value."""
    return _WORD.unpack_from(raw, offset)[0]


def is_end_of_directory(raw: bytes) -> bool:
    """
    Check whether a raw record is the end-of-directory terminator.

    Callers walking the catalog use this to stop before calling
    decode_entry(), which rejects terminator records.
    """
    return len(raw) > 0 and raw[0] == END_OF_DIRECTORY


def is_deleted_record(raw: bytes) -> bool:
    """Check whether a raw record is marked deleted."""
    return len(raw) > 0 and raw[0] == DELETED_MARKER


# =============================================================================
# Directory Entry
# =============================================================================

@dataclass(frozen=True)
class DirectoryEntry:
    """
    One decoded RDOS catalog entry.

    Instances are plain values built fresh from the raw record on every
    decode. They hold no reference to the disk they came from; reading the
    file's content goes through rdos_tools.catalog.reader.read_file_data()
    with an explicit block store.

    Attributes:
        filename: The 24-character name, space padding intact. Deleted
            entries report DELETED_FILENAME instead.
        file_type: Single character type marker from offset $18
        size_in_blocks: Number of 256-byte blocks allocated to the file
        address: Load address (meaningful for Applesoft and binary files)
        byte_length: Exact file length in bytes
        starting_block: Index of the first block holding the file
        deleted: True if the record carries the deletion marker
    """
    filename: str
    file_type: str
    size_in_blocks: int
    address: int
    byte_length: int
    starting_block: int
    deleted: bool = False

    @property
    def display_name(self) -> str:
        """Get the name without trailing spaces."""
        return self.filename.rstrip()

    @property
    def allocated_bytes(self) -> int:
        """Number of bytes reserved on disk for this file."""
        return self.size_in_blocks * BLOCK_SIZE

    @property
    def end_block(self) -> int:
        """Index one past the last block of this file."""
        return self.starting_block + self.size_in_blocks

    def is_consistent(self) -> bool:
        """Check that the byte length fits inside the allocated blocks."""
        return self.byte_length <= self.allocated_bytes


def decode_entry(raw: bytes) -> DirectoryEntry:
    """
    Decode a 32-byte catalog record.

    Args:
        raw: Exactly 32 bytes taken from a catalog block

    Returns:
        A new DirectoryEntry

    Raises:
        MalformedRecordError: If the buffer is not 32 bytes long, or if it
            is the end-of-directory terminator

    Example:
        >>> entry = decode_entry(block[0:32])
        >>> entry.display_name
        'HELLO'
    """
    if len(raw) != ENTRY_SIZE:
        raise MalformedRecordError(
            f"directory record must be {ENTRY_SIZE} bytes, got {len(raw)}",
            length=len(raw),
        )

    if raw[0] == END_OF_DIRECTORY:
        raise MalformedRecordError(
            "end-of-directory record cannot be decoded as an entry",
            length=len(raw),
        )

    deleted = raw[0] == DELETED_MARKER
    if deleted:
        filename = DELETED_FILENAME
    else:
        filename = _apple_text(raw[OFFSET_FILENAME:OFFSET_FILENAME + FILENAME_LENGTH])

    return DirectoryEntry(
        filename=filename,
        file_type=_apple_text(raw[OFFSET_FILE_TYPE:OFFSET_FILE_TYPE + 1]),
        size_in_blocks=raw[OFFSET_SIZE_IN_BLOCKS],
        address=_word(raw, OFFSET_ADDRESS),
        byte_length=_word(raw, OFFSET_BYTE_LENGTH),
        starting_block=_word(raw, OFFSET_STARTING_BLOCK),
        deleted=deleted,
    )
