"""Exception hierarchy for seamcraft.

Geometry queries and edits never raise for out-of-range indices or
degenerate shapes; those are silent no-ops or numeric fallbacks. The
exceptions below cover invalid input data and misuse of the API.
"""


class SeamcraftError(Exception):
    """Base exception for all seamcraft errors."""

    pass


class GeometryError(SeamcraftError):
    """Errors in geometric data or calculations."""

    pass


class ContourError(GeometryError):
    """Invalid contour or vertex data."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DetachedContourError(GeometryError):
    """A seam allowance was used after its contour was discarded."""

    def __init__(self) -> None:
        super().__init__("Seam allowance is no longer attached to a contour")


class RecordError(SeamcraftError):
    """A serialized record is missing fields or holds invalid values."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid {source} record: {reason}")


class PieceError(SeamcraftError):
    """Errors related to reading or writing pattern piece files."""

    pass


class PieceLoadError(PieceError):
    """Error loading a pattern piece file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load piece '{path}': {reason}")


class PieceSaveError(PieceError):
    """Error saving offsets or a pattern piece."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")
