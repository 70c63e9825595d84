"""Distance-field rasterizer for antialiased primitives.

Any primitive that can report (a) its distance from a pixel-space point and
(b) an inclusive pixel bounding box can be drawn. The rasterizer walks the
bounding box, inflated by a small margin to catch the antialiasing fringe,
and stamps a red intensity that falls off linearly with distance.

Compositing:
    - Full-intensity pixels always overwrite
    - Partial (fringe) pixels never overwrite a pixel that is already lit
    This keeps successive segments of one streamline from eroding each
    other's edges. It is not alpha blending and must stay that way.

Frame buffer:
    numpy uint8 array of shape (height, width, 3); pixel (x, y) is
    ``frame[y, x]``. The caller owns the buffer; it is mutated in place.

Usage:
    line = Line(Vec2(0.0, 0.0), Vec2(1.0, 0.0), grid)
    n_written = draw(line, grid, frame)
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from .errors import DegenerateGeometryError
from .grid import Grid, PixelRange
from .vec2 import Vec2

BOUNDING_BOX_MARGIN = 2
INSIDE_PIXELS = 1.0
FALLOFF_PIXELS = 1.0


class Drawable(ABC):
    """Anything ``draw`` can render."""

    @abstractmethod
    def pixel_dist(self, p: Vec2) -> float:
        """Distance from pixel-space point ``p`` to this object, in pixels.

        Both the argument and the result are in *pixel space*, not
        coordinate space.
        """

    @abstractmethod
    def bounding_box(self) -> Tuple[PixelRange, PixelRange]:
        """Inclusive pixel ranges (xrange, yrange) that fully contain the object."""


def get_alpha(
    dist: float,
    inside_pixels: float = INSIDE_PIXELS,
    falloff_length: float = FALLOFF_PIXELS
) -> float:
    """Intensity in [0, 1] for a pixel ``dist`` pixels away from the geometry.

    1.0 within ``inside_pixels``, then linear decay to 0.0 over
    ``falloff_length`` pixels.
    """
    if dist < inside_pixels:
        return 1.0
    return max(1.0 - (dist - inside_pixels) / falloff_length, 0.0)


def draw(
    obj: Drawable,
    grid: Grid,
    frame: np.ndarray,
    margin: int = BOUNDING_BOX_MARGIN
) -> int:
    """Rasterize ``obj`` into ``frame`` as a red antialiased stamp.

    Parameters
    ----------
    obj : Drawable
        Primitive to draw
    grid : Grid
        Grid the primitive was built against
    frame : np.ndarray
        (height, width, 3) uint8 buffer, modified in place
    margin : int
        Pixels added to each side of the bounding box for the falloff band

    Returns
    -------
    int
        Number of pixels stamped with a non-zero intensity

    Raises
    ------
    ValueError
        If the frame shape does not match the grid resolution
    """
    width, height = grid.resolution
    if frame.shape != (height, width, 3):
        raise ValueError(
            f"Frame shape {frame.shape} does not match grid ({height}, {width}, 3)"
        )

    (xmin, xmax), (ymin, ymax) = grid.inflate_bounding_box(*obj.bounding_box(), margin)

    written = 0
    for px in range(xmin, xmax + 1):
        for py in range(ymin, ymax + 1):
            dist = obj.pixel_dist(grid.centered_pixel(px, py))
            alpha = get_alpha(dist)

            if alpha < 1.0 and frame[py, px].any():
                continue

            # Unlit pixels are already (0, 0, 0)
            value = int(255.0 * alpha)
            if value == 0:
                continue

            frame[py, px] = (value, 0, 0)
            written += 1

    return written


def _ordered(a: int, b: int) -> PixelRange:
    return (a, b) if a <= b else (b, a)


class Line(Drawable):
    """Segment between two coordinate-space points, stored in pixel space.

    The bounding box comes from the clamped, truncated pixels of the
    endpoints, so it can be tighter than the sub-pixel extent of the
    segment; ``draw``'s margin covers the difference.
    """

    def __init__(self, p0: Vec2, p1: Vec2, grid: Grid):
        """Build a segment from coordinate-space endpoints.

        Raises
        ------
        DegenerateGeometryError
            If both endpoints map to the same pixel-space point
        """
        pix0 = grid.get_clamped_pixel(p0)
        pix1 = grid.get_clamped_pixel(p1)

        self.xrange = _ordered(pix0[0], pix1[0])
        self.yrange = _ordered(pix0[1], pix1[1])

        self.p0 = grid.in_pixel_space(p0)
        self.p1 = grid.in_pixel_space(p1)

        if self.p0 == self.p1:
            raise DegenerateGeometryError(f"Zero-length line at {p0}")

    def __repr__(self) -> str:
        return f"Line(p0={self.p0}, p1={self.p1})"

    def lerp(self, t: float) -> Vec2:
        """Pixel-space point at parameter ``t`` (0 → p0, 1 → p1)."""
        return self.p0.lerp(self.p1, t)

    def closest(self, p: Vec2) -> Vec2:
        """Point on the segment nearest to pixel-space point ``p``."""
        d = self.p1 - self.p0
        t = (p - self.p0).dot(d) / d.dot(d)
        return self.lerp(min(max(t, 0.0), 1.0))

    def pixel_dist(self, p: Vec2) -> float:
        return self.closest(p).dist(p)

    def bounding_box(self) -> Tuple[PixelRange, PixelRange]:
        return self.xrange, self.yrange
