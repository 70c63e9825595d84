"""Mapping between coordinate space and the pixel raster.

Three spaces are involved:
    - Coordinate space: continuous, user-chosen ranges (the field lives here)
    - Pixel space: continuous, raster-aligned; ``n + 0.5`` is a pixel centre
    - Pixels: discrete ``(x, y)`` indices into ``[0, width) × [0, height)``

Geometry is measured in pixel space so that distances are in pixels, while
rasterization only walks the discrete pixels of a small bounding box.

Invariants:
    - ``min < max`` on both ranges (checked at construction)
    - Y axis is inverted: increasing y moves toward row 0 (world-up, screen-down)
    - Instances are immutable and safe to share

Usage:
    grid = Grid((1024, 1024), (-6.1, 6.1), (-6.1, 6.1))
    px, py = grid.get_clamped_pixel(Vec2(1.0, 2.0))
"""

import logging
from typing import List, Tuple

from .errors import PixelOutOfRange
from .vec2 import Vec2

logger = logging.getLogger(__name__)

PixelRange = Tuple[int, int]
"""Inclusive ``(lo, hi)`` range of pixel indices along one axis."""


class Grid:
    """Immutable coordinate ↔ pixel transform for a fixed raster.

    Attributes
    ----------
    unit_x, unit_y : float
        Coordinate-space units per pixel along each axis
    origin : Tuple[int, int]
        Pixel location that coordinate (0, 0) maps to
    """

    __slots__ = ('_resolution', '_xrange', '_yrange', '_origin', '_unit_x', '_unit_y')

    def __init__(
        self,
        resolution: Tuple[int, int],
        xrange: Tuple[float, float],
        yrange: Tuple[float, float]
    ):
        """Create a grid from an output resolution and coordinate bounds.

        Parameters
        ----------
        resolution : Tuple[int, int]
            Raster size (width_px, height_px), both ≥ 1
        xrange, yrange : Tuple[float, float]
            Inclusive coordinate bounds (min, max), min < max

        Raises
        ------
        ValueError
            If a range is not strictly increasing or the resolution is empty
        """
        xpixels, ypixels = int(resolution[0]), int(resolution[1])
        minx, maxx = float(xrange[0]), float(xrange[1])
        miny, maxy = float(yrange[0]), float(yrange[1])

        if xpixels < 1 or ypixels < 1:
            raise ValueError(f"Resolution must be at least 1x1, got {resolution}")
        if not minx < maxx:
            raise ValueError(f"xrange must be strictly increasing, got ({minx}, {maxx})")
        if not miny < maxy:
            raise ValueError(f"yrange must be strictly increasing, got ({miny}, {maxy})")

        self._resolution = (xpixels, ypixels)
        self._xrange = (minx, maxx)
        self._yrange = (miny, maxy)

        self._unit_x = (maxx - minx) / xpixels
        self._unit_y = (maxy - miny) / ypixels

        # Truncated toward zero, like the pixel lookups below
        self._origin = (int(-(minx / self._unit_x)), int(maxy / self._unit_y))

        logger.debug(
            f"Grid: res={self._resolution}, x={self._xrange}, y={self._yrange}, "
            f"origin={self._origin}, unit={self._unit_x:.5f}×{self._unit_y:.5f}"
        )

    def __repr__(self) -> str:
        return (
            f"Grid(resolution={self._resolution}, "
            f"xrange={self._xrange}, yrange={self._yrange})"
        )

    @property
    def resolution(self) -> Tuple[int, int]:
        """Output resolution (width_px, height_px)."""
        return self._resolution

    @property
    def ranges(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Coordinate bounds this grid was built with: (xrange, yrange)."""
        return self._xrange, self._yrange

    @property
    def unit_x(self) -> float:
        return self._unit_x

    @property
    def unit_y(self) -> float:
        return self._unit_y

    @property
    def origin(self) -> Tuple[int, int]:
        return self._origin

    # ------------------------------------------------------------------
    # Coordinate → pixel
    # ------------------------------------------------------------------

    def in_pixel_space(self, p: Vec2) -> Vec2:
        """Convert a coordinate-space point to pixel space, keeping sub-pixel values.

        Truncating the result gives the same answer as ``get_pixel``.
        No bounds check is performed.
        """
        xpos = self._origin[0] + p.x / self._unit_x
        ypos = self._origin[1] - p.y / self._unit_y
        return Vec2(xpos, ypos)

    def get_pixel(self, p: Vec2) -> Tuple[int, int]:
        """Convert a coordinate-space point to the index of the pixel containing it.

        Parameters
        ----------
        p : Vec2
            Point in coordinate space

        Returns
        -------
        Tuple[int, int]
            Pixel index (x, y)

        Raises
        ------
        PixelOutOfRange
            If the pixel falls outside the raster; ``exc.pixel`` holds the
            signed, unclamped index

        Notes
        -----
        Rounds toward zero, so pixel-space values in (-1, 0) land on index 0.
        """
        q = self.in_pixel_space(p)
        xpos, ypos = int(q.x), int(q.y)
        width, height = self._resolution

        if xpos < 0 or xpos >= width or ypos < 0 or ypos >= height:
            raise PixelOutOfRange((xpos, ypos), self._resolution)
        return xpos, ypos

    def get_clamped_pixel(self, p: Vec2) -> Tuple[int, int]:
        """Like ``get_pixel`` but clamps to the nearest valid pixel. Never fails."""
        try:
            return self.get_pixel(p)
        except PixelOutOfRange as e:
            x, y = e.pixel
            width, height = self._resolution
            return min(max(x, 0), width - 1), min(max(y, 0), height - 1)

    # ------------------------------------------------------------------
    # Pixel → coordinate
    # ------------------------------------------------------------------

    def get_coords(self, xpix: int, ypix: int) -> Vec2:
        """Coordinate-space location of the centre of pixel (xpix, ypix)."""
        c = self.centered_pixel(xpix, ypix)
        x = (c.x - self._origin[0]) * self._unit_x
        y = (self._origin[1] - c.y) * self._unit_y
        return Vec2(x, y)

    def centered_pixel(self, xpix: int, ypix: int) -> Vec2:
        """Pixel-space location of the centre of pixel (xpix, ypix)."""
        return Vec2(xpix + 0.5, ypix + 0.5)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def inflate_bounding_box(
        self,
        xrange: PixelRange,
        yrange: PixelRange,
        n: int
    ) -> Tuple[PixelRange, PixelRange]:
        """Grow an inclusive pixel box by ``n`` pixels per side, clamped to the raster.

        The low end saturates at 0 and the high end at ``resolution - 1``.
        """
        xmin, xmax = xrange
        ymin, ymax = yrange
        width, height = self._resolution

        xmin = max(xmin - n, 0)
        xmax = min(xmax + n, width - 1)
        ymin = max(ymin - n, 0)
        ymax = min(ymax + n, height - 1)

        return (xmin, xmax), (ymin, ymax)

    def contains(self, pt: Vec2) -> bool:
        """Inclusive membership test in coordinate space."""
        minx, maxx = self._xrange
        miny, maxy = self._yrange
        return minx <= pt.x <= maxx and miny <= pt.y <= maxy

    def border_points(self, border_dist: float, points_per_border: int) -> List[Vec2]:
        """Evenly spaced points along the four edges of the inset rectangle.

        Parameters
        ----------
        border_dist : float
            Inset from each edge, in coordinate units
        points_per_border : int
            Points per edge; ``4 * points_per_border`` points are returned

        Returns
        -------
        List[Vec2]
            For each step i: bottom, top, left, right edge points

        Raises
        ------
        ValueError
            If the inset collapses the rectangle or points_per_border < 1
        """
        if points_per_border < 1:
            raise ValueError(f"points_per_border must be >= 1, got {points_per_border}")

        xmin, xmax = self._xrange[0] + border_dist, self._xrange[1] - border_dist
        ymin, ymax = self._yrange[0] + border_dist, self._yrange[1] - border_dist

        if not xmin < xmax or not ymin < ymax:
            raise ValueError(
                f"border_dist={border_dist} collapses grid ranges "
                f"{self._xrange} x {self._yrange}"
            )

        xdist = (xmax - xmin) / points_per_border
        ydist = (ymax - ymin) / points_per_border

        points = []
        for i in range(points_per_border):
            points.append(Vec2(xmin + i * xdist, ymin))
            points.append(Vec2(xmin + i * xdist, ymax))
            points.append(Vec2(xmin, ymin + i * ydist))
            points.append(Vec2(xmax, ymin + i * ydist))
        return points
