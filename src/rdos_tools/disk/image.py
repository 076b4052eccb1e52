"""
RDOS Disk Image Block Store
===========================

DiskImage exposes a raw Apple II disk image as a BlockStore.

Block Mapping
-------------
RDOS numbers blocks sequentially across the disk, one block per sector:

    track  = block // sectors_per_track
    sector = block %  sectors_per_track
    offset = (track * image_sectors_per_track + sector) * 256

With a native 13-sector image both sector counts are 13 and the mapping
is a flat slice. With a 16-sector image the three unused sectors at the
end of every track are skipped.

Blocks past the end of the image are returned short (or empty), which
read_file_data() reports as a TruncatedReadError.

Usage
-----
    >>> from rdos_tools.disk import DiskImage
    >>> image = DiskImage.from_file("game.d13")
    >>> block = image.read_block(13)
"""

from pathlib import Path
from typing import Optional, Union
import logging

from rdos_tools.catalog.entry import BLOCK_SIZE
from rdos_tools.catalog.reader import BlockStore
from rdos_tools.config import DiskGeometry
from rdos_tools.errors import StorageError

# Logger for this module
logger = logging.getLogger(__name__)


class DiskImage(BlockStore):
    """
    Block store backed by a disk image held in memory.

    Attributes:
        data: The raw image bytes
        geometry: Layout used to map blocks to image offsets
    """

    def __init__(self, data: bytes, geometry: Optional[DiskGeometry] = None):
        self.data = bytes(data)
        self.geometry = geometry or DiskGeometry.for_image_size(len(self.data))

    @classmethod
    def from_file(
        cls,
        filepath: Union[str, Path],
        geometry: Optional[DiskGeometry] = None,
    ) -> "DiskImage":
        """
        Load a disk image from disk.

        Args:
            filepath: Path to the image file
            geometry: Layout to use (default: guessed from the file size)

        Returns:
            A DiskImage over the file's content

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        filepath = Path(filepath)
        data = filepath.read_bytes()
        logger.debug(f"Loaded image {filepath} ({len(data)} bytes)")
        return cls(data, geometry)

    @classmethod
    def from_bytes(cls, data: bytes, geometry: Optional[DiskGeometry] = None) -> "DiskImage":
        """Create a DiskImage from raw bytes."""
        return cls(data, geometry)

    @property
    def track_count(self) -> int:
        """Number of complete tracks in the image."""
        return len(self.data) // self.geometry.track_bytes

    @property
    def block_count(self) -> int:
        """Number of RDOS blocks available in the image."""
        return self.track_count * self.geometry.sectors_per_track

    def block_offset(self, block: int) -> int:
        """Get the image offset of a block."""
        if block < 0:
            raise StorageError(f"invalid block index {block}")
        track, sector = divmod(block, self.geometry.sectors_per_track)
        return (track * self.geometry.image_sectors_per_track + sector) * BLOCK_SIZE

    def read_block(self, block: int) -> bytes:
        """
        Read a single 256-byte block.

        Returns fewer than 256 bytes (possibly none) if the block lies past
        the end of the image.
        """
        offset = self.block_offset(block)
        return self.data[offset:offset + BLOCK_SIZE]

    def read_blocks_from(self, start_block: int, block_count: int) -> bytes:
        if block_count < 0:
            raise StorageError(f"invalid block count {block_count}")

        result = bytearray()
        for block in range(start_block, start_block + block_count):
            chunk = self.read_block(block)
            result.extend(chunk)
            if len(chunk) < BLOCK_SIZE:
                logger.debug(f"Block {block} is past the end of the image")
                break
        return bytes(result)
