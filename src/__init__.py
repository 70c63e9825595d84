"""Streamline renderer: particles flowing through 2D vector fields.

Architecture layers (strict one-way dependency):
    scripts/ → src/flowfield/ → src/utils/

Key invariants:
    - Fields are defined in coordinate space; distances are measured in pixel space
    - Y is up in coordinate space and down in the raster
    - Frames are uint8 RGB arrays shaped (height, width, 3)
    - YAML-only configs, validated with pydantic before use
"""

__version__ = "0.3.0"
