"""Streamline renderer core.

Renders particles flowing through an analytic 2D vector field as
antialiased red line segments on an RGB frame buffer.

Modules:
    - vec2: immutable 2D vector
    - grid: coordinate space ↔ pixel space ↔ pixel index mapping
    - draw: Drawable interface, distance-field rasterizer, Line
    - vector_field: fixed-step integrator (advance / rewind)
    - fields: named analytic fields
    - animation: particle seeding and the frame loop

Invariants:
    - Geometry is measured in pixel space; fields live in coordinate space
    - Frames are (height, width, 3) uint8 arrays, indexed frame[y, x]
    - Rasterization cost is proportional to a primitive's bounding box
"""

from .animation import FlowAnimation, new_frame
from .draw import Drawable, Line, draw, get_alpha
from .errors import DegenerateGeometryError, PixelOutOfRange
from .fields import available_fields, get_field, make_vfield
from .grid import Grid
from .vec2 import Vec2
from .vector_field import VField

__all__ = [
    'DegenerateGeometryError',
    'Drawable',
    'FlowAnimation',
    'Grid',
    'Line',
    'PixelOutOfRange',
    'VField',
    'Vec2',
    'available_fields',
    'draw',
    'get_alpha',
    'get_field',
    'make_vfield',
    'new_frame',
]
