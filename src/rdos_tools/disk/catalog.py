"""
RDOS Catalog Walker
===================

RdosCatalog walks the catalog area of an RDOS volume, which is a flat
sequence of 32-byte records (there are no subdirectories). The walk stops
at the first record whose first byte is $00, or at the end of the catalog
sectors, whichever comes first.

Records are decoded afresh on every call; nothing is cached, so a catalog
object can be kept around while the underlying store changes.

Usage Examples
--------------
Listing files:
    >>> from rdos_tools.disk import DiskImage, RdosCatalog
    >>> catalog = RdosCatalog(DiskImage.from_file("game.d13"))
    >>> for name in catalog.list_files():
    ...     print(name)

Extracting a file:
    >>> data = catalog.read_file("HELLO")
"""

from typing import Iterator, Optional, Union
import logging

from rdos_tools.catalog.entry import (
    BLOCK_SIZE,
    ENTRY_SIZE,
    DirectoryEntry,
    decode_entry,
    is_end_of_directory,
)
from rdos_tools.catalog.filetypes import Classification, classify
from rdos_tools.catalog.reader import BlockStore, read_file_data
from rdos_tools.config import DiskGeometry
from rdos_tools.errors import TruncatedReadError

# Logger for this module
logger = logging.getLogger(__name__)


class RdosCatalog:
    """
    Read-only view of an RDOS catalog.

    Attributes:
        store: Block store holding the volume
        geometry: Location of the catalog on the volume
    """

    def __init__(self, store: BlockStore, geometry: Optional[DiskGeometry] = None):
        self.store = store
        self.geometry = geometry or getattr(store, "geometry", None) or DiskGeometry()

    # =========================================================================
    # Record Iteration
    # =========================================================================

    def iter_records(self) -> Iterator[bytes]:
        """
        Iterate over raw catalog records up to the terminator.

        Yields:
            32-byte records, deleted ones included. The terminator record
            itself is not yielded.

        Raises:
            TruncatedReadError: If a catalog block cannot be read in full
        """
        start = self.geometry.catalog_start_block
        for index in range(self.geometry.catalog_sectors):
            block_number = start + index
            block = self.store.read_blocks_from(block_number, 1)
            if len(block) < BLOCK_SIZE:
                logger.error(f"Catalog block {block_number} is truncated ({len(block)} bytes)")
                raise TruncatedReadError(block_number, 1, BLOCK_SIZE, len(block))

            for offset in range(0, BLOCK_SIZE, ENTRY_SIZE):
                raw = block[offset:offset + ENTRY_SIZE]
                if is_end_of_directory(raw):
                    logger.debug(f"End of catalog at block {block_number}, offset {offset}")
                    return
                yield raw

    def iter_entries(self, include_deleted: bool = False) -> Iterator[DirectoryEntry]:
        """
        Iterate over decoded catalog entries.

        Args:
            include_deleted: Also yield entries marked deleted

        Yields:
            DirectoryEntry instances in catalog order
        """
        for raw in self.iter_records():
            entry = decode_entry(raw)
            if entry.deleted and not include_deleted:
                continue
            if not entry.deleted and not entry.is_consistent():
                logger.warning(
                    f"Entry '{entry.display_name}' claims {entry.byte_length} bytes "
                    f"in {entry.size_in_blocks} blocks"
                )
            yield entry

    # =========================================================================
    # Public Query Methods
    # =========================================================================

    def list_files(self) -> list[str]:
        """
        List the names of all live files.

        Returns:
            File names with trailing padding removed
        """
        return [entry.display_name for entry in self.iter_entries()]

    def find(self, name: str) -> Optional[DirectoryEntry]:
        """
        Find a live file by name.

        Args:
            name: File name (case-insensitive, surrounding spaces ignored)

        Returns:
            The DirectoryEntry if found, None otherwise
        """
        wanted = name.strip().upper()
        for entry in self.iter_entries():
            if entry.display_name.upper() == wanted:
                return entry
        return None

    def read_file(self, target: Union[str, DirectoryEntry]) -> bytes:
        """
        Read the exact content of a file.

        Args:
            target: File name or an entry previously obtained from this catalog

        Returns:
            The file content, exactly byte_length bytes long

        Raises:
            FileNotFoundError: If no live file has the given name
            InvalidEntryError: If a deleted entry is passed in
            TruncatedReadError: If the image does not hold the whole file
        """
        if isinstance(target, DirectoryEntry):
            entry = target
        else:
            entry = self.find(target)
            if entry is None:
                raise FileNotFoundError(f"file '{target}' not found in catalog")
        return read_file_data(entry, self.store)

    def classify(self, name: str) -> Classification:
        """Classify a live file by name."""
        entry = self.find(name)
        if entry is None:
            raise FileNotFoundError(f"file '{name}' not found in catalog")
        return classify(entry)

    def get_info(self) -> dict:
        """
        Get summary information about the catalog.

        Returns:
            Dictionary with catalog information
        """
        live = 0
        deleted = 0
        blocks_used = 0
        bytes_used = 0
        last_block = 0
        for entry in self.iter_entries(include_deleted=True):
            if entry.deleted:
                deleted += 1
                continue
            live += 1
            blocks_used += entry.size_in_blocks
            bytes_used += entry.byte_length
            last_block = max(last_block, entry.end_block)

        return {
            "file_count": live,
            "deleted_count": deleted,
            "capacity": self.geometry.catalog_entry_capacity,
            "catalog_start_block": self.geometry.catalog_start_block,
            "blocks_used": blocks_used,
            "bytes_used": bytes_used,
            "end_block": last_block,
        }
