"""
Shared Test Fixtures
====================

Builders for raw RDOS directory records and disk images, used by the
catalog, disk, and CLI tests.
"""

import struct
from typing import Callable

import pytest


BLOCK = 256
TRACKS = 35


def build_record(
    name: str = "HELLO",
    file_type: str = "A",
    size_in_blocks: int = 2,
    address: int = 0x0803,
    byte_length: int = 400,
    starting_block: int = 5,
    high_ascii: bool = False,
) -> bytes:
    """
    Build a 32-byte RDOS catalog record.

    With high_ascii set, the name and type bytes get bit 7 set the way
    RDOS writes them on real disks.
    """
    text = name.ljust(24)[:24].encode("ascii") + file_type.encode("ascii")
    if high_ascii:
        text = bytes(b | 0x80 for b in text)
    return text + struct.pack("<BHHH", size_in_blocks, address, byte_length, starting_block)


def build_image(
    records: list[bytes],
    files: dict[int, bytes] | None = None,
    sectors_per_track: int = 13,
    image_sectors_per_track: int = 13,
    tracks: int = TRACKS,
) -> bytes:
    """
    Build an RDOS disk image.

    Args:
        records: Raw catalog records written from the start of track 1.
            A terminator follows automatically when space remains.
        files: Mapping of starting block to content written there
        sectors_per_track: Sectors RDOS uses per track
        image_sectors_per_track: Sectors stored per track in the image
        tracks: Number of tracks in the image
    """
    image = bytearray(tracks * image_sectors_per_track * BLOCK)

    def block_offset(block: int) -> int:
        track, sector = divmod(block, sectors_per_track)
        return (track * image_sectors_per_track + sector) * BLOCK

    def write_blocks(start: int, data: bytes) -> None:
        for index in range(0, len(data), BLOCK):
            chunk = data[index:index + BLOCK]
            offset = block_offset(start + index // BLOCK)
            image[offset:offset + len(chunk)] = chunk

    catalog = b"".join(records)
    write_blocks(sectors_per_track, catalog)

    for start, content in (files or {}).items():
        write_blocks(start, content)

    return bytes(image)


@pytest.fixture
def make_record() -> Callable[..., bytes]:
    """Factory fixture for raw catalog records."""
    return build_record


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory fixture for disk images."""
    return build_image


@pytest.fixture
def hello_record() -> bytes:
    """
    The HELLO record used throughout the tests.

    Applesoft program, 2 blocks, load address $0803, 400 bytes long,
    starting at block 5.
    """
    return build_record()


@pytest.fixture
def patterned_blocks() -> Callable[[int], bytes]:
    """Factory for block content where every byte encodes its position."""
    def _make(count: int) -> bytes:
        return bytes((i * 7 + i // BLOCK) & 0xFF for i in range(count * BLOCK))
    return _make
