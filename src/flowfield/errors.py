"""Exception types raised by the flow renderer core.

Construction errors (bad grid ranges, collapsed border inset, bad nudge)
are plain ``ValueError``. The two types below carry extra meaning for
callers that want to recover.
"""

from typing import Tuple


class PixelOutOfRange(LookupError):
    """Raised by ``Grid.get_pixel`` when a point falls off the raster.

    Attributes
    ----------
    pixel : Tuple[int, int]
        Signed, unclamped pixel coordinates of the offending point.
    """

    def __init__(self, pixel: Tuple[int, int], resolution: Tuple[int, int]):
        self.pixel = pixel
        self.resolution = resolution
        super().__init__(
            f"Pixel {pixel} outside raster of {resolution[0]}x{resolution[1]}"
        )


class DegenerateGeometryError(ValueError):
    """Raised for zero-length vectors and segments that have no direction."""

    pass
