"""
RDOS Tools - Read-Only Access to Apple II RDOS Disks
====================================================

This package reads disks formatted with RDOS, the operating system SSI
shipped on its Apple II game disks. RDOS keeps a flat catalog of 32-byte
records on track 1 and stores files in whole 256-byte blocks.

Main Components
---------------
- **catalog**: Directory record codec, file type classifier, and file
  data accessor. Pure, stateless, and free of presentation concerns.

- **disk**: Disk image block store and catalog walker

- **config**: Disk geometry defaults and environment overrides

- **cli**: The rdoscat command-line tool

Quick Start
-----------
List and extract files from an image:
    >>> from rdos_tools import DiskImage, RdosCatalog
    >>> catalog = RdosCatalog(DiskImage.from_file("game.d13"))
    >>> for entry in catalog.iter_entries():
    ...     print(entry.display_name, entry.file_type, entry.byte_length)
    >>> data = catalog.read_file("HELLO")

Decode a single record:
    >>> from rdos_tools import decode_entry, classify
    >>> entry = decode_entry(raw_record)
    >>> kind, hint = classify(entry)

Or use the command-line tool:
    $ rdoscat list game.d13
    $ rdoscat extract -o ./out game.d13

Reference Documentation
-----------------------
- RDOS catalog layout: AppleCommander's RDOS support
  (https://applecommander.github.io/)
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from rdos_tools.errors import (
    RdosError,
    CatalogError,
    MalformedRecordError,
    InvalidEntryError,
    StorageError,
    TruncatedReadError,
)

from rdos_tools.catalog import (
    BLOCK_SIZE,
    ENTRY_SIZE,
    DirectoryEntry,
    decode_entry,
    is_end_of_directory,
    is_deleted_record,
    ContentKind,
    FilterHint,
    Classification,
    classify,
    BlockStore,
    MemoryBlockStore,
    read_file_data,
)

from rdos_tools.config import DiskGeometry
from rdos_tools.disk import DiskImage, RdosCatalog

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "RdosError",
    "CatalogError",
    "MalformedRecordError",
    "InvalidEntryError",
    "StorageError",
    "TruncatedReadError",
    # Catalog core
    "BLOCK_SIZE",
    "ENTRY_SIZE",
    "DirectoryEntry",
    "decode_entry",
    "is_end_of_directory",
    "is_deleted_record",
    "ContentKind",
    "FilterHint",
    "Classification",
    "classify",
    "BlockStore",
    "MemoryBlockStore",
    "read_file_data",
    # Disk access
    "DiskGeometry",
    "DiskImage",
    "RdosCatalog",
]
