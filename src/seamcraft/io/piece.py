"""Pattern piece records on disk.

A pattern piece file is the plain structured record of a contour and its
seam allowance, stored as JSON text:

    {"name": "...", "contour": {...}, "seam_allowance": {...}}

Key classes:
- PatternPiece: A named contour with its seam allowance
- PieceReader: Load a pattern piece file
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from seamcraft.config import SeamcraftSettings, get_default_settings
from seamcraft.core import Contour, SeamAllowance
from seamcraft.domain import Point
from seamcraft.exceptions import PieceLoadError, PieceSaveError, RecordError


@dataclass
class PatternPiece:
    """A named contour together with its seam allowance.

    Attributes:
        name: Piece name (e.g., "Bodice front")
        contour: The piece outline
        seam_allowance: Seam allowance ranges over the outline
    """

    name: str
    contour: Contour
    seam_allowance: SeamAllowance

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the piece
        """
        return {
            "name": self.name,
            "contour": self.contour.to_dict(),
            "seam_allowance": self.seam_allowance.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], settings: SeamcraftSettings | None = None
    ) -> "PatternPiece":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a piece
            settings: Settings for the new contour and seam allowance

        Returns:
            PatternPiece instance

        Raises:
            RecordError: If the record is malformed
        """
        if settings is None:
            settings = get_default_settings()
        if not isinstance(data, dict) or "contour" not in data:
            raise RecordError("piece", "missing 'contour'")

        contour = Contour.from_dict(data["contour"], config=settings.geometry)
        seam_allowance = SeamAllowance.from_dict(
            data.get("seam_allowance", {}), contour, config=settings.offset
        )
        return cls(
            name=str(data.get("name", "Untitled")),
            contour=contour,
            seam_allowance=seam_allowance,
        )


class PieceReader:
    """Loads a pattern piece file.

    Example:
        reader = PieceReader(Path("bodice.json"))
        piece = reader.load()
        print(piece.contour.total_length())
    """

    def __init__(self, piece_path: Path, settings: SeamcraftSettings | None = None) -> None:
        """Initialize the piece reader.

        Args:
            piece_path: Path to the piece file
            settings: Settings applied to the loaded piece
        """
        self._piece_path = piece_path
        self._settings = settings
        self._piece: PatternPiece | None = None

    def load(self) -> PatternPiece:
        """Load and decode the piece file.

        Returns:
            The loaded piece

        Raises:
            PieceLoadError: If the file is missing, not JSON, or malformed
        """
        if not self._piece_path.exists():
            raise PieceLoadError(str(self._piece_path), "file not found")

        try:
            data = json.loads(self._piece_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise PieceLoadError(str(self._piece_path), str(e)) from e
        except json.JSONDecodeError as e:
            raise PieceLoadError(str(self._piece_path), f"invalid JSON: {e}") from e

        try:
            self._piece = PatternPiece.from_dict(data, self._settings)
        except RecordError as e:
            raise PieceLoadError(str(self._piece_path), str(e)) from e
        return self._piece

    @property
    def piece(self) -> PatternPiece:
        """The loaded piece.

        Raises:
            RuntimeError: If the piece has not been loaded yet
        """
        if self._piece is None:
            raise RuntimeError("Piece not loaded. Call load() first.")
        return self._piece


def write_piece(piece: PatternPiece, path: Path) -> None:
    """Write a pattern piece record as JSON.

    Raises:
        PieceSaveError: If the file cannot be written
    """
    try:
        path.write_text(json.dumps(piece.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise PieceSaveError(str(path), str(e)) from e


def write_offsets(offsets: list[list[Point]], path: Path) -> None:
    """Write offset polygons as JSON lists of [x, y] pairs.

    Raises:
        PieceSaveError: If the file cannot be written
    """
    data = {"offsets": [[list(p.to_tuple()) for p in polygon] for polygon in offsets]}
    try:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        raise PieceSaveError(str(path), str(e)) from e
