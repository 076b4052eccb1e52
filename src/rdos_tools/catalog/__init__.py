"""
RDOS Catalog Handling
=====================

This package holds the read-only core of the toolkit:

- **entry**: Decode 32-byte directory records into DirectoryEntry values
- **filetypes**: Classify entries by content kind and recommend a decoder
- **reader**: Fetch the exact content of a file from a BlockStore

Quick Start
-----------
    >>> from rdos_tools.catalog import decode_entry, classify, read_file_data
    >>> entry = decode_entry(raw_record)
    >>> kind, hint = classify(entry)
    >>> data = read_file_data(entry, store)

Iterating over a whole catalog is left to the caller; see
rdos_tools.disk.RdosCatalog for the standard walker.
"""

from rdos_tools.catalog.entry import (
    BLOCK_SIZE,
    DELETED_FILENAME,
    DELETED_MARKER,
    END_OF_DIRECTORY,
    ENTRY_SIZE,
    FILENAME_LENGTH,
    DirectoryEntry,
    decode_entry,
    is_deleted_record,
    is_end_of_directory,
)
from rdos_tools.catalog.filetypes import (
    DOUBLE_HIRES_LENGTH_RANGE,
    HIRES_LENGTH_RANGE,
    Classification,
    ContentKind,
    FilterHint,
    classify,
    content_kind,
)
from rdos_tools.catalog.reader import (
    BlockStore,
    MemoryBlockStore,
    read_file_data,
)

__all__ = [
    # Entry codec
    "BLOCK_SIZE",
    "DELETED_FILENAME",
    "DELETED_MARKER",
    "END_OF_DIRECTORY",
    "ENTRY_SIZE",
    "FILENAME_LENGTH",
    "DirectoryEntry",
    "decode_entry",
    "is_deleted_record",
    "is_end_of_directory",
    # Classification
    "DOUBLE_HIRES_LENGTH_RANGE",
    "HIRES_LENGTH_RANGE",
    "Classification",
    "ContentKind",
    "FilterHint",
    "classify",
    "content_kind",
    # Data access
    "BlockStore",
    "MemoryBlockStore",
    "read_file_data",
]
