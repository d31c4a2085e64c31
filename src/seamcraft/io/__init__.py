"""Pattern piece I/O for seamcraft.

This module reads and writes the plain structured records of contours and
seam allowances as JSON text, for the command line tool.

Key classes:
- PatternPiece: A named contour with its seam allowance
- PieceReader: Load pattern piece files
"""

from seamcraft.io.piece import PatternPiece, PieceReader, write_offsets, write_piece

__all__ = [
    "PatternPiece",
    "PieceReader",
    "write_offsets",
    "write_piece",
]
