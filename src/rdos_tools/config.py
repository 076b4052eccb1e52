"""
RDOS Tools - Disk Geometry Configuration
========================================

Geometry settings used to locate blocks and the catalog inside a disk
image. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (see rdos_tools.cli.rdoscat)

RDOS addresses the disk in 256-byte blocks numbered from track 0,
sector 0. RDOS 2.1 formats disks with 13 sectors per track, so:
- block = track * 13 + sector
- the catalog lives on track 1, sectors 0-10 (blocks 13-23)
- 11 catalog sectors * 8 entries = 88 catalog entries

Images of 13-sector disks come in two layouts. A .d13 image stores 13
sectors per track. A 140K .dsk image stores 16 sectors per track with
the RDOS data in the first 13; image_sectors_per_track covers both.
"""

from dataclasses import dataclass
from typing import Optional
import os

from rdos_tools.catalog.entry import BLOCK_SIZE, ENTRY_SIZE

# Size of a 35-track, 16-sector image (.dsk / .do)
DSK_IMAGE_SIZE = 35 * 16 * BLOCK_SIZE


@dataclass
class DiskGeometry:
    """
    Layout of an RDOS volume inside a disk image.

    Attributes:
        sectors_per_track: Sectors RDOS uses per track (default: 13)
        image_sectors_per_track: Sectors stored per track in the image
            file (default: 13; 16 for .dsk images)
        catalog_track: Track holding the catalog (default: 1)
        catalog_sectors: Number of catalog sectors (default: 11)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # RDOS LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    sectors_per_track: int = 13
    catalog_track: int = 1
    catalog_sectors: int = 11

    # ═══════════════════════════════════════════════════════════════════════════
    # IMAGE LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    image_sectors_per_track: int = 13

    def __post_init__(self) -> None:
        if self.sectors_per_track <= 0:
            raise ValueError(f"sectors_per_track must be positive, got {self.sectors_per_track}")
        if self.image_sectors_per_track < self.sectors_per_track:
            raise ValueError(
                f"image_sectors_per_track ({self.image_sectors_per_track}) "
                f"is smaller than sectors_per_track ({self.sectors_per_track})"
            )

    # ═══════════════════════════════════════════════════════════════════════════
    # DERIVED VALUES
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def catalog_start_block(self) -> int:
        """First block of the catalog."""
        return self.catalog_track * self.sectors_per_track

    @property
    def catalog_entry_capacity(self) -> int:
        """Maximum number of entries the catalog can hold."""
        return self.catalog_sectors * (BLOCK_SIZE // ENTRY_SIZE)

    @property
    def track_bytes(self) -> int:
        """Bytes per track in the image file."""
        return self.image_sectors_per_track * BLOCK_SIZE

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def for_image_size(cls, size: int) -> "DiskGeometry":
        """
        Guess the image layout from its file size.

        140K images are taken to hold 16 sectors per track; anything else
        is treated as a native 13-sector image.
        """
        if size == DSK_IMAGE_SIZE:
            return cls(image_sectors_per_track=16)
        return cls()

    @classmethod
    def from_env(cls, base: Optional["DiskGeometry"] = None) -> "DiskGeometry":
        """
        Create DiskGeometry from environment variables.

        Environment variables (all optional):
            RDOS_SECTORS_PER_TRACK: Sectors RDOS uses per track
            RDOS_IMAGE_SECTORS_PER_TRACK: Sectors stored per track in the image
            RDOS_CATALOG_TRACK: Track holding the catalog
            RDOS_CATALOG_SECTORS: Number of catalog sectors

        Values that are not integers or are out of range are ignored. An
        image sector count smaller than the RDOS sector count falls back to
        the base layout.

        Args:
            base: Geometry to start from (default: the RDOS 2.1 defaults)

        Returns:
            DiskGeometry with values from environment variables
        """
        base = base or cls()
        values = {
            "sectors_per_track": base.sectors_per_track,
            "image_sectors_per_track": base.image_sectors_per_track,
            "catalog_track": base.catalog_track,
            "catalog_sectors": base.catalog_sectors,
        }

        env_names = {
            "sectors_per_track": "RDOS_SECTORS_PER_TRACK",
            "image_sectors_per_track": "RDOS_IMAGE_SECTORS_PER_TRACK",
            "catalog_track": "RDOS_CATALOG_TRACK",
            "catalog_sectors": "RDOS_CATALOG_SECTORS",
        }
        minimums = {
            "sectors_per_track": 1,
            "image_sectors_per_track": 1,
            "catalog_track": 0,
            "catalog_sectors": 1,
        }
        for key, env_name in env_names.items():
            if raw := os.environ.get(env_name):
                try:
                    value = int(raw)
                except ValueError:
                    continue  # Ignore invalid values
                if value >= minimums[key]:
                    values[key] = value

        # An image never stores fewer sectors per track than RDOS uses
        if values["image_sectors_per_track"] < values["sectors_per_track"]:
            values["image_sectors_per_track"] = max(
                base.image_sectors_per_track, values["sectors_per_track"]
            )

        return cls(**values)
