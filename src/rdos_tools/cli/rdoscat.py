"""
rdoscat - RDOS Disk Catalog Command-Line Interface
==================================================

This module implements the command-line interface for reading RDOS disk
images. It lists the catalog, shows how each file should be decoded, and
extracts file contents byte for byte.

Commands
--------
- **list**: List the catalog of a disk image
- **info**: Show catalog summary information
- **classify**: Show content kind and decoder hint for each file
- **extract**: Extract files from a disk image

Usage Examples
--------------
List the catalog:
    $ rdoscat list game.d13

Include deleted entries and extra columns:
    $ rdoscat list --all -v game.d13

Extract every file:
    $ rdoscat extract -o ./output/ game.d13

Extract one file from a 16-sector image:
    $ rdoscat --image-sectors 16 extract -n HELLO game.dsk
"""

from pathlib import Path
from typing import Optional
import re

import click

from rdos_tools import __version__
from rdos_tools.catalog import DirectoryEntry, classify
from rdos_tools.cli.errors import handle_cli_exception
from rdos_tools.config import DiskGeometry
from rdos_tools.disk import DiskImage, RdosCatalog


IMAGE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


# =============================================================================
# Helpers
# =============================================================================

def _build_geometry(
    image_size: int,
    sectors_per_track: Optional[int],
    image_sectors: Optional[int],
) -> DiskGeometry:
    """Combine size-based defaults, environment, and command-line overrides."""
    try:
        geometry = DiskGeometry.from_env(DiskGeometry.for_image_size(image_size))
        if sectors_per_track is None and image_sectors is None:
            return geometry

        spt = sectors_per_track or geometry.sectors_per_track
        image_spt = image_sectors or max(geometry.image_sectors_per_track, spt)
        return DiskGeometry(
            sectors_per_track=spt,
            image_sectors_per_track=image_spt,
            catalog_track=geometry.catalog_track,
            catalog_sectors=geometry.catalog_sectors,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _open_catalog(ctx: click.Context, image_path: Path) -> RdosCatalog:
    """Load an image and wrap it in a catalog using the global options."""
    data = image_path.read_bytes()
    geometry = _build_geometry(
        len(data),
        ctx.obj.get("sectors_per_track"),
        ctx.obj.get("image_sectors"),
    )
    return RdosCatalog(DiskImage(data, geometry))


def _output_name(entry: DirectoryEntry) -> str:
    """Make a host-safe file name from an RDOS file name."""
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", entry.display_name).strip("_")
    return name or "UNNAMED"


def _unique_output_name(entry: DirectoryEntry, used: set[str]) -> str:
    """
    Make a host file name that no earlier file in this run has taken.

    Different RDOS names can sanitize to the same host name ("A B" and
    "A_B"); later ones get a numeric suffix such as "A_B.1".
    """
    base = _output_name(entry)
    name = base
    suffix = 1
    while name.upper() in used:
        name = f"{base}.{suffix}"
        suffix += 1
    used.add(name.upper())
    return name


def _type_column(entry: DirectoryEntry) -> str:
    """Type marker as listed; deleted entries show a blank type."""
    return " " if entry.deleted else entry.file_type


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="rdoscat")
@click.option(
    "--sectors-per-track",
    type=click.IntRange(1, 32),
    default=None,
    help="Sectors per track used by RDOS (default: 13)",
)
@click.option(
    "--image-sectors",
    type=click.IntRange(1, 32),
    default=None,
    help="Sectors per track stored in the image (default: by image size)",
)
@click.pass_context
def main(
    ctx: click.Context,
    sectors_per_track: Optional[int],
    image_sectors: Optional[int],
) -> None:
    """
    Catalog reader for Apple II RDOS disk images.

    List, classify, and extract files from RDOS disks (.d13, .dsk).

    \b
    Commands:
      list      List catalog entries
      info      Show catalog summary
      classify  Show content kind and decoder hint
      extract   Extract file contents

    \b
    Examples:
      rdoscat list game.d13
      rdoscat info game.d13
      rdoscat extract -o ./output/ game.d13
    """
    ctx.ensure_object(dict)
    ctx.obj["sectors_per_track"] = sectors_per_track
    ctx.obj["image_sectors"] = image_sectors


# =============================================================================
# List Command
# =============================================================================

@main.command("list")
@click.argument("image", type=IMAGE_PATH)
@click.option(
    "-a", "--all", "include_deleted",
    is_flag=True,
    help="Include deleted entries",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show load address and deleted flag",
)
@click.pass_context
def cmd_list(ctx: click.Context, image: Path, include_deleted: bool, verbose: bool) -> None:
    """
    List the catalog of an RDOS disk image.

    \b
    Example:
      rdoscat list game.d13

    \b
    Output format:
      T  Blk  Name                      Length  Start
      A  002  HELLO                        400    005
    """
    try:
        catalog = _open_catalog(ctx, image)

        header = f"{'T':<2} {'Blk':>3}  {'Name':<24} {'Length':>6}  {'Start':>5}"
        if verbose:
            header += f"  {'Addr':<5}"
        click.echo(header)
        click.echo("-" * len(header))

        count = 0
        for entry in catalog.iter_entries(include_deleted=include_deleted):
            line = (
                f"{_type_column(entry):<2} {entry.size_in_blocks:03d}  "
                f"{entry.filename:<24} {entry.byte_length:>6}  {entry.starting_block:>5}"
            )
            if verbose:
                line += f"  ${entry.address:04X}"
                if entry.deleted:
                    line += "  Deleted"
            click.echo(line)
            count += 1

        if verbose:
            click.echo("-" * len(header))
            click.echo(f"Total: {count} entries")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Info Command
# =============================================================================

@main.command("info")
@click.argument("image", type=IMAGE_PATH)
@click.pass_context
def cmd_info(ctx: click.Context, image: Path) -> None:
    """
    Show summary information about an RDOS disk image.

    \b
    Example:
      rdoscat info game.d13
    """
    try:
        catalog = _open_catalog(ctx, image)
        info = catalog.get_info()
        geometry = catalog.geometry

        click.echo(f"Catalog Information: {image}")
        click.echo("=" * 40)
        click.echo(f"Geometry:    {geometry.sectors_per_track} sectors/track "
                   f"({geometry.image_sectors_per_track} in image)")
        click.echo(f"Catalog:     block {info['catalog_start_block']}, "
                   f"{info['capacity']} entries max")
        click.echo()
        click.echo("Contents:")
        click.echo(f"  Files:       {info['file_count']}")
        click.echo(f"  Deleted:     {info['deleted_count']}")
        click.echo()
        click.echo("Space Usage:")
        click.echo(f"  Blocks:      {info['blocks_used']}")
        click.echo(f"  Bytes:       {info['bytes_used']}")
        click.echo(f"  End block:   {info['end_block']}")

    except Exception as e:
        handle_cli_exception(e)


# =============================================================================
# Classify Command
# =============================================================================

@main.command("classify")
@click.argument("image", type=IMAGE_PATH)
@click.pass_context
def cmd_classify(ctx: click.Context, image: Path) -> None:
    """
    Show the content kind and recommended decoder for each file.

    Graphics detection is based on file length alone and is only a hint.

    \b
    Example:
      rdoscat classify game.d13
    """
    try:
        catalog = _open_catalog(ctx, image)

        click.echo(f"{'Name':<24} {'Kind':<16} {'Hint'}")
        click.echo("-" * 70)
        for entry in catalog.iter_entries():
            kind, hint = classify(entry)
            click.echo(f"{entry.display_name:<24} {kind.get_description():<16} {hint.value}")

    except Exception as e:
        handle_cli_exception(e)


# =============================================================================
# Extract Command
# =============================================================================

@main.command("extract")
@click.argument("image", type=IMAGE_PATH)
@click.option(
    "-o", "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Output directory (default: current directory)",
)
@click.option(
    "-n", "--name",
    help="Extract only this file (by name)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.pass_context
def cmd_extract(
    ctx: click.Context,
    image: Path,
    output: Path,
    name: Optional[str],
    verbose: bool,
) -> None:
    """
    Extract files from an RDOS disk image.

    By default, extracts every live file. Each file is written with its
    exact byte length; block padding is dropped.

    \b
    Examples:
      rdoscat extract -o ./output/ game.d13
      rdoscat extract -n HELLO game.d13
    """
    try:
        output.mkdir(parents=True, exist_ok=True)
        catalog = _open_catalog(ctx, image)

        if name:
            entry = catalog.find(name)
            if entry is None:
                available = ", ".join(catalog.list_files())
                raise FileNotFoundError(
                    f"file '{name}' not found in catalog (available: {available})"
                )
            entries = [entry]
        else:
            entries = list(catalog.iter_entries())

        used_names: set[str] = set()
        for entry in entries:
            out_path = output / _unique_output_name(entry, used_names)
            out_path.write_bytes(catalog.read_file(entry))
            if verbose or name:
                click.echo(f"Extracted {entry.display_name} to {out_path}")

        if not name:
            if not entries:
                click.echo("No files found in catalog")
            else:
                click.echo(f"Extracted {len(entries)} files to {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Extract")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
