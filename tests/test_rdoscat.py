"""
Tests for rdoscat - RDOS Catalog CLI
====================================

These tests run the rdoscat commands against small generated images.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from rdos_tools.cli.errors import ExitCode
from rdos_tools.cli.rdoscat import main


@pytest.fixture
def image_file(tmp_path, make_image, make_record) -> Path:
    """Write an image with an Applesoft program, a picture, and a deleted file."""
    deleted = bytearray(make_record(name="GONE", file_type="T"))
    deleted[0] = 0x80
    records = [
        make_record(name="HELLO", file_type="A", size_in_blocks=2,
                    byte_length=400, starting_block=30, high_ascii=True),
        bytes(deleted),
        make_record(name="TITLE PIC", file_type="B", size_in_blocks=32,
                    address=0x2000, byte_length=8192, starting_block=40, high_ascii=True),
    ]
    files = {30: bytes(range(256)) * 2, 40: bytes([0x2A]) * 8192}
    path = tmp_path / "game.d13"
    path.write_bytes(make_image(records, files))
    return path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestRdoscatCLI:
    """Tests for the rdoscat command group."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "RDOS disk images" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_list(self, runner, image_file):
        result = runner.invoke(main, ["list", str(image_file)])
        assert result.exit_code == 0
        assert "HELLO" in result.output
        assert "TITLE PIC" in result.output
        assert "NOT IN USE" not in result.output

    def test_list_all_verbose(self, runner, image_file):
        result = runner.invoke(main, ["list", "--all", "-v", str(image_file)])
        assert result.exit_code == 0
        assert "<NOT IN USE>" in result.output
        assert "Deleted" in result.output
        assert "$2000" in result.output
        assert "Total: 3 entries" in result.output

    def test_list_all_blanks_deleted_type(self, runner, image_file):
        """Test that a deleted entry lists no type even though its record has one."""
        result = runner.invoke(main, ["list", "--all", str(image_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        deleted_line = next(line for line in lines if "<NOT IN USE>" in line)
        assert deleted_line.startswith("  ")
        assert not deleted_line.startswith("T")
        hello_line = next(line for line in lines if "HELLO" in line)
        assert hello_line.startswith("A ")

    def test_info(self, runner, image_file):
        result = runner.invoke(main, ["info", str(image_file)])
        assert result.exit_code == 0
        assert "Files:       2" in result.output
        assert "Deleted:     1" in result.output
        assert "Blocks:      34" in result.output
        assert "End block:   72" in result.output

    def test_classify(self, runner, image_file):
        result = runner.invoke(main, ["classify", str(image_file)])
        assert result.exit_code == 0
        assert "Applesoft BASIC" in result.output
        assert "color hi-res graphics" in result.output

    def test_extract_all(self, runner, image_file, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(main, ["extract", "-o", str(out_dir), str(image_file)])

        assert result.exit_code == 0
        assert "Extracted 2 files" in result.output
        assert (out_dir / "HELLO").read_bytes() == (bytes(range(256)) * 2)[:400]
        assert (out_dir / "TITLE_PIC").read_bytes() == bytes([0x2A]) * 8192

    def test_extract_one(self, runner, image_file, tmp_path):
        result = runner.invoke(
            main, ["extract", "-n", "hello", "-o", str(tmp_path), str(image_file)]
        )
        assert result.exit_code == 0
        assert (tmp_path / "HELLO").stat().st_size == 400
        assert not (tmp_path / "TITLE_PIC").exists()

    def test_extract_missing_name(self, runner, image_file, tmp_path):
        result = runner.invoke(
            main, ["extract", "-n", "NOPE", "-o", str(tmp_path), str(image_file)]
        )
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "not found" in result.output
        assert "HELLO" in result.output

    def test_extract_damaged_image(self, runner, tmp_path, make_image, make_record):
        """Test that a file running off the image end is a read error."""
        records = [make_record(name="FAR", size_in_blocks=4, byte_length=900,
                               starting_block=35 * 13 - 1)]
        path = tmp_path / "bad.d13"
        path.write_bytes(make_image(records))

        result = runner.invoke(main, ["extract", "-o", str(tmp_path / "out"), str(path)])

        assert result.exit_code == ExitCode.READ_ERROR
        assert "Extract error" in result.output

    def test_missing_image(self, runner, tmp_path):
        result = runner.invoke(main, ["list", str(tmp_path / "missing.d13")])
        assert result.exit_code == 2

    def test_geometry_options(self, runner, tmp_path, make_image, make_record):
        """Test reading a 16-sector image with an explicit layout."""
        records = [make_record(name="HELLO", byte_length=10, starting_block=20)]
        data = make_image(records, {20: b"0123456789"}, image_sectors_per_track=16, tracks=3)
        path = tmp_path / "small.dsk"
        path.write_bytes(data)

        result = runner.invoke(main, ["--image-sectors", "16", "extract",
                                      "-n", "HELLO", "-o", str(tmp_path), str(path)])

        assert result.exit_code == 0
        assert (tmp_path / "HELLO").read_bytes() == b"0123456789"

    def test_invalid_geometry(self, runner, image_file):
        result = runner.invoke(main, ["--sectors-per-track", "16", "--image-sectors", "13",
                                      "list", str(image_file)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_narrow_image_sectors_env_ignored(self, runner, image_file, monkeypatch):
        """Test that an image sector count below the RDOS count in the environment is ignored."""
        monkeypatch.setenv("RDOS_IMAGE_SECTORS_PER_TRACK", "8")
        result = runner.invoke(main, ["list", str(image_file)])
        assert result.exit_code == 0
        assert "HELLO" in result.output

    def test_extract_colliding_host_names(self, runner, tmp_path, make_image, make_record):
        """Test that names sanitizing to the same host name are all written."""
        records = [
            make_record(name="A B", size_in_blocks=1, byte_length=5, starting_block=30),
            make_record(name="A_B", size_in_blocks=1, byte_length=5, starting_block=31),
        ]
        path = tmp_path / "clash.d13"
        path.write_bytes(make_image(records, {30: b"FIRST", 31: b"OTHER"}))
        out_dir = tmp_path / "out"

        result = runner.invoke(main, ["extract", "-o", str(out_dir), str(path)])

        assert result.exit_code == 0
        assert "Extracted 2 files" in result.output
        assert (out_dir / "A_B").read_bytes() == b"FIRST"
        assert (out_dir / "A_B.1").read_bytes() == b"OTHER"
