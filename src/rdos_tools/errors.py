"""
RDOS Tools Error Hierarchy
==========================

This module defines the exception hierarchy for the RDOS toolkit.
All exceptions inherit from RdosError, allowing callers to catch all
toolkit-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
RdosError (base)
├── CatalogError (directory record handling)
│   ├── MalformedRecordError - record buffer has the wrong size or shape
│   └── InvalidEntryError - operation requested on a deleted record
└── StorageError (block store access)
    └── TruncatedReadError - store returned fewer bytes than allocated

Design Philosophy
-----------------
Each exception keeps the values that caused it as attributes, so callers
can report or inspect them without parsing the message text. None of these
errors is retried: the RDOS format carries no redundancy to retry against.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class RdosError(Exception):
    """
    Base exception for all RDOS toolkit errors.

    All exceptions in the toolkit inherit from this class, allowing callers
    to catch all toolkit-related errors with a single except clause:

        try:
            data = catalog.read_file("HELLO")
        except RdosError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Catalog Exceptions
# =============================================================================

class CatalogError(RdosError):
    """Base exception for directory record errors."""
    pass


class MalformedRecordError(CatalogError):
    """
    Directory record buffer cannot be decoded.

    Raised when:
    - The buffer is not exactly 32 bytes long
    - The record is the end-of-directory terminator (first byte $00)

    This is a caller bug rather than a disk problem: callers are expected
    to slice records on 32-byte boundaries and stop at the terminator.

    Attributes:
        length: Length of the offending buffer
    """

    def __init__(self, message: str, length: Optional[int] = None):
        self.length = length
        super().__init__(message)


class InvalidEntryError(CatalogError):
    """
    Operation requested on a record that has no content.

    Raised when file data is requested for a deleted record. The blocks a
    deleted record points at may already belong to another file.

    Attributes:
        filename: Filename reported by the entry
    """

    def __init__(self, message: str, filename: Optional[str] = None):
        self.filename = filename
        super().__init__(message)


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageError(RdosError):
    """
    Block store access failed.

    Raised by block stores when a read cannot be performed at all, for
    example a negative block index or an unreadable image file.
    """
    pass


class TruncatedReadError(StorageError):
    """
    Block store returned fewer bytes than the entry needs.

    Usually means the disk image is damaged, the geometry is wrong, or the
    entry points past the end of the volume.

    Attributes:
        start_block: First block requested
        block_count: Number of blocks requested
        expected: Number of bytes needed
        actual: Number of bytes available
    """

    def __init__(
        self,
        start_block: int,
        block_count: int,
        expected: int,
        actual: int,
        reason: Optional[str] = None,
    ):
        self.start_block = start_block
        self.block_count = block_count
        self.expected = expected
        self.actual = actual

        message = (
            f"short read at block {start_block} ({block_count} blocks): "
            f"expected {expected} bytes, got {actual}"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
