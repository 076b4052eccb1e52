"""
RDOS Disk Access
================

Caller-side helpers built on top of the catalog core:

- **DiskImage**: BlockStore over an Apple II disk image (.d13, .dsk)
- **RdosCatalog**: Walks the catalog, finds and reads files
"""

from rdos_tools.disk.image import DiskImage
from rdos_tools.disk.catalog import RdosCatalog

__all__ = [
    "DiskImage",
    "RdosCatalog",
]
