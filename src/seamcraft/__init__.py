"""seamcraft - Curved-contour geometry and seam allowances for pattern drafting.

seamcraft models a pattern piece outline as a closed contour of sharp corners
and smooth, tangent-continuous points, turns it into line and cubic Bezier
segments, answers length and hit-testing queries, and computes seam
allowance offsets over the whole contour or any part of it.

Example:
    $ seamcraft offsets bodice-front.json --join miter

This prints the seam allowance polygons of every range defined in the piece.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
