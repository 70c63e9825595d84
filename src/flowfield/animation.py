"""Particle seeding and the per-frame draw loop.

Particles start on the inset border of the grid and are rewound onto
their streamlines, so the first frames already show flow instead of a
ring of dots. Each frame every live particle takes one ``VField.advance``
step and the segment it travelled is drawn with ``draw.Line``, including
particles rewound past the edge, which flow back in over the next frames.

``norm_threshold`` only bounds the rewind. A particle expires when the
field vanishes under it or when it leaves the grid after having been
inside it. Depending on ``respawn`` it then restarts from its seed point
or is retired.

The frame is a single persistent buffer: trails accumulate across frames.

Usage:
    anim = FlowAnimation.from_config(validators.load_flow_config(path))
    for i, frame in anim.frames(600):
        ...
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

import numpy as np

from .draw import Line, draw
from .errors import DegenerateGeometryError
from .fields import make_vfield
from .grid import Grid
from .vec2 import Vec2
from .vector_field import VField

if TYPE_CHECKING:
    from src.utils.validators import FlowConfigV1

logger = logging.getLogger(__name__)


def new_frame(grid: Grid) -> np.ndarray:
    """Allocate a black (height, width, 3) uint8 frame for ``grid``."""
    width, height = grid.resolution
    return np.zeros((height, width, 3), dtype=np.uint8)


def lit_fraction(frame: np.ndarray) -> float:
    """Fraction of pixels with any non-zero channel."""
    return float(frame.any(axis=-1).mean())


class FlowAnimation:
    """Owns the particle positions between frames.

    Attributes
    ----------
    grid : Grid
        Raster mapping
    vfield : VField
        Field the particles follow
    seeds : List[Vec2]
        Rewound starting points; also the respawn anchors
    particles : List[Optional[Vec2]]
        Current position per particle, ``None`` once retired
    """

    def __init__(
        self,
        grid: Grid,
        vfield: VField,
        *,
        border_dist: float = 0.1,
        points_per_border: int = 24,
        rewind_iterations: int = 1000,
        norm_threshold: float = 0.5,
        respawn: bool = True
    ):
        self.grid = grid
        self.vfield = vfield
        self.border_dist = border_dist
        self.points_per_border = points_per_border
        self.rewind_iterations = rewind_iterations
        self.norm_threshold = norm_threshold
        self.respawn = respawn

        self.seeds: List[Vec2] = []
        self.particles: List[Optional[Vec2]] = []
        self._inside: List[bool] = []

    @classmethod
    def from_config(cls, cfg: 'FlowConfigV1') -> 'FlowAnimation':
        """Build grid, field and animation from a validated config."""
        grid = Grid(cfg.grid.resolution, cfg.grid.xrange, cfg.grid.yrange)
        vfield = make_vfield(cfg.field.name, cfg.field.nudge)
        return cls(
            grid,
            vfield,
            border_dist=cfg.seeding.border_dist,
            points_per_border=cfg.seeding.points_per_border,
            rewind_iterations=cfg.seeding.rewind_iterations,
            norm_threshold=cfg.seeding.norm_threshold,
            respawn=cfg.animation.respawn,
        )

    @property
    def live_count(self) -> int:
        return sum(p is not None for p in self.particles)

    def seed(self) -> List[Vec2]:
        """Place particles on the border and rewind them onto streamlines.

        Returns
        -------
        List[Vec2]
            The seed points (``4 * points_per_border`` of them)
        """
        border = self.grid.border_points(self.border_dist, self.points_per_border)
        self.seeds = [
            self.vfield.rewind(pt, self.rewind_iterations, self.norm_threshold, self.grid)
            for pt in border
        ]
        self.particles = list(self.seeds)
        self._inside = [self.grid.contains(pt) for pt in self.seeds]

        logger.info(
            f"Seeded {len(self.seeds)} particles "
            f"({self.points_per_border} per border, inset {self.border_dist})"
        )
        return self.seeds

    def _expire(self, i: int, pt: Vec2, reason: str) -> None:
        if self.respawn:
            self.particles[i] = self.seeds[i]
            self._inside[i] = self.grid.contains(self.seeds[i])
        else:
            self.particles[i] = None
        logger.debug(
            f"Particle {i} {reason} at {pt}: "
            f"{'respawned' if self.respawn else 'retired'}"
        )

    def step(self, frame: np.ndarray) -> int:
        """Advance every particle one step and draw the segment it travelled.

        Particles outside the grid are advanced and drawn too; their
        segments clamp to the raster edge. A particle expires when it sits
        on a stationary point or when it leaves the grid after having been
        inside it. The segment up to the exit point is still drawn.

        Parameters
        ----------
        frame : np.ndarray
            (height, width, 3) uint8 buffer, modified in place

        Returns
        -------
        int
            Pixels lit this step
        """
        if not self.seeds:
            self.seed()

        written = 0
        for i, prev in enumerate(self.particles):
            if prev is None:
                continue

            try:
                now = self.vfield.advance(prev)
            except DegenerateGeometryError:
                self._expire(i, prev, "stalled")
                continue

            written += draw(Line(prev, now, self.grid), self.grid, frame)

            inside = self.grid.contains(now)
            if self._inside[i] and not inside:
                self._expire(i, now, "escaped")
            else:
                self.particles[i] = now
                self._inside[i] = inside

        return written

    def frames(
        self,
        n: int,
        frame: Optional[np.ndarray] = None,
        log_every: int = 0
    ) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield ``(index, frame)`` for ``n`` frames drawn into one buffer.

        The same array is yielded every time; copy it to keep a snapshot.
        ``log_every > 0`` logs coverage every that many frames.
        """
        if frame is None:
            frame = new_frame(self.grid)

        for index in range(n):
            written = self.step(frame)
            if log_every and (index + 1) % log_every == 0:
                logger.info(
                    f"Frame {index + 1}/{n}: lit {written} px, "
                    f"live={self.live_count}, lit={lit_fraction(frame):.3%}"
                )
            yield index, frame
