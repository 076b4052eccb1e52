"""
RDOS File Data Access
=====================

Reads the content of a file described by a directory entry.

RDOS allocates whole 256-byte blocks to every file while the entry also
records the exact byte length. Reading a file therefore means fetching
all allocated blocks from the volume and cutting the result down to the
logical length.

Block Stores
------------
The volume is reached through a BlockStore, passed in explicitly on every
call. Entries never hold a reference to the disk they came from, so any
store can be substituted: a disk image file (rdos_tools.disk.DiskImage),
an in-memory buffer (MemoryBlockStore), or a test double.

Nothing is cached; every call reads the store again.
"""

from abc import ABC, abstractmethod
import logging

from rdos_tools.catalog.entry import BLOCK_SIZE, DirectoryEntry
from rdos_tools.errors import InvalidEntryError, StorageError, TruncatedReadError

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Block Store Interface
# =============================================================================

class BlockStore(ABC):
    """
    Abstract source of 256-byte blocks.

    Block 0 is the first block of the volume region that holds the files
    this catalog describes.
    """

    @abstractmethod
    def read_blocks_from(self, start_block: int, block_count: int) -> bytes:
        """
        Read consecutive blocks.

        Args:
            start_block: Index of the first block
            block_count: Number of blocks to read

        Returns:
            block_count * 256 bytes. Stores may return fewer bytes when the
            range runs past the end of the volume.

        Raises:
            StorageError: If the read cannot be performed at all
        """
        pass


class MemoryBlockStore(BlockStore):
    """
    Block store over a volume held in memory.

    The buffer is treated as a flat sequence of 256-byte blocks. Reads past
    the end return whatever bytes remain.
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)

    @property
    def block_count(self) -> int:
        """Number of whole blocks in the buffer."""
        return len(self._data) // BLOCK_SIZE

    def read_blocks_from(self, start_block: int, block_count: int) -> bytes:
        if start_block < 0 or block_count < 0:
            raise StorageError(
                f"invalid block range: start {start_block}, count {block_count}"
            )
        offset = start_block * BLOCK_SIZE
        return self._data[offset:offset + block_count * BLOCK_SIZE]


# =============================================================================
# File Data Access
# =============================================================================

def read_file_data(entry: DirectoryEntry, store: BlockStore) -> bytes:
    """
    Read the exact content of a file.

    Requests all size_in_blocks blocks starting at starting_block, then
    returns the first byte_length bytes. Either the whole file is returned
    or an exception is raised; partial content is never returned.

    Args:
        entry: Decoded directory entry of a live file
        store: Block store holding the volume

    Returns:
        Exactly entry.byte_length bytes

    Raises:
        InvalidEntryError: If the entry is deleted
        TruncatedReadError: If the store returns fewer bytes than the
            allocation, or the byte length exceeds the allocation
        StorageError: If the store cannot perform the read
    """
    if entry.deleted:
        raise InvalidEntryError(
            "cannot read content of a deleted entry",
            filename=entry.filename,
        )

    expected = entry.allocated_bytes
    raw = store.read_blocks_from(entry.starting_block, entry.size_in_blocks)

    if len(raw) < expected:
        raise TruncatedReadError(
            entry.starting_block, entry.size_in_blocks, expected, len(raw)
        )

    # Stores may hand back more than was asked for; only the allocation counts
    if entry.byte_length > expected:
        raise TruncatedReadError(
            entry.starting_block,
            entry.size_in_blocks,
            entry.byte_length,
            expected,
            reason="byte length exceeds allocated blocks",
        )

    logger.debug(
        f"Read '{entry.display_name}': {entry.size_in_blocks} blocks "
        f"from block {entry.starting_block}, {entry.byte_length} bytes"
    )
    return bytes(raw[:entry.byte_length])
