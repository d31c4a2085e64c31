"""Unit tests for the command-line interface.

Tests run the Typer app in-process against piece files in a temporary
directory.
"""

import json

import pytest
from typer.testing import CliRunner

from seamcraft import __version__
from seamcraft.cli.app import app
from seamcraft.core import Contour, SeamAllowance
from seamcraft.domain import CornerJoin, Point, Vertex, VertexType
from seamcraft.io import PatternPiece, write_piece
from seamcraft.utils import configure_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handlers each invocation installs on the root logger."""
    yield
    configure_logging(quiet=True)


def rectangle_contour():
    return Contour(
        [
            Vertex(Point(0.0, 0.0)),
            Vertex(Point(100.0, 0.0)),
            Vertex(Point(100.0, 50.0), VertexType.SMOOTH),
            Vertex(Point(0.0, 50.0)),
        ]
    )


@pytest.fixture
def piece_path(tmp_path):
    contour = rectangle_contour()
    seam = SeamAllowance(contour, corner_join=CornerJoin.MITER)
    seam.add_range(0, 2, 15.0)
    seam.add_range(2, 0, 10.0)
    path = tmp_path / "bodice.json"
    write_piece(PatternPiece("Bodice front", contour, seam), path)
    return path


@pytest.fixture
def bare_piece_path(tmp_path):
    contour = rectangle_contour()
    path = tmp_path / "bare.json"
    write_piece(PatternPiece("Facing", contour, SeamAllowance(contour)), path)
    return path


class TestMainOptions:
    """Tests for global options."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_log_file(self, tmp_path, piece_path):
        log_file = tmp_path / "seamcraft.log"
        result = runner.invoke(
            app, ["--log-file", str(log_file), "--log-level", "ERROR", "offsets", str(piece_path)]
        )
        assert result.exit_code == 0
        assert log_file.exists()
        assert "Piece loaded" in log_file.read_text(encoding="utf-8")


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, piece_path):
        result = runner.invoke(app, ["info", str(piece_path)])
        assert result.exit_code == 0
        assert "Bodice front" in result.output
        assert "curve" in result.output
        assert "line" in result.output
        assert "2 ranges" in result.output

    def test_info_without_ranges(self, bare_piece_path):
        result = runner.invoke(app, ["info", str(bare_piece_path)])
        assert result.exit_code == 0
        assert "No seam allowance ranges" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Could not load piece" in result.output

    def test_info_wrong_shape_record(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"contour": {"vertices": [1, 2, 3]}}), encoding="utf-8")
        result = runner.invoke(app, ["info", str(path)])
        assert result.exit_code == 1
        assert "Could not load piece" in result.output


class TestOffsetsCommand:
    """Tests for the offsets command."""

    def test_offsets_written(self, tmp_path, piece_path):
        output = tmp_path / "offsets.json"
        result = runner.invoke(app, ["offsets", str(piece_path), "-o", str(output)])
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["offsets"]) == 2
        assert "2 polygons" in result.output

    def test_join_override(self, piece_path):
        result = runner.invoke(app, ["offsets", str(piece_path), "--join", "ROUND"])
        assert result.exit_code == 0

    def test_invalid_join(self, piece_path):
        result = runner.invoke(app, ["offsets", str(piece_path), "--join", "zigzag"])
        assert result.exit_code == 1
        assert "Invalid corner join" in result.output

    def test_width_offsets_whole_contour(self, tmp_path, bare_piece_path):
        output = tmp_path / "offsets.json"
        result = runner.invoke(
            app, ["offsets", str(bare_piece_path), "--width", "5", "-o", str(output)]
        )
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["offsets"]) == 1

    def test_no_ranges(self, bare_piece_path):
        result = runner.invoke(app, ["offsets", str(bare_piece_path)])
        assert result.exit_code == 0
        assert "No seam allowance ranges" in result.output

    def test_disabled(self, tmp_path):
        contour = rectangle_contour()
        seam = SeamAllowance(contour)
        seam.add_full_contour(10.0)
        seam.set_enabled(False)
        path = tmp_path / "disabled.json"
        write_piece(PatternPiece("Lining", contour, seam), path)

        result = runner.invoke(app, ["offsets", str(path)])
        assert result.exit_code == 0
        assert "disabled" in result.output

    def test_quiet(self, piece_path):
        result = runner.invoke(app, ["--quiet", "offsets", str(piece_path)])
        assert result.exit_code == 0
        assert "polygons" not in result.output


class TestClosestCommand:
    """Tests for the closest command."""

    def test_closest_straight_segment(self, piece_path):
        result = runner.invoke(app, ["closest", str(piece_path), "50", "3"])
        assert result.exit_code == 0
        assert "Segment 0 at (50.000, 0.000)" in result.output

    def test_closest_curved_segment(self, piece_path):
        result = runner.invoke(app, ["closest", str(piece_path), "110", "25"])
        assert result.exit_code == 0
        assert "Segment 1" in result.output
