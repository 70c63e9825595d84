"""Fixed-step streamline integration over an analytic 2D field.

The field is two pure functions of (x, y) in coordinate space. ``advance``
marches at constant speed along the normalized direction; ``rewind`` walks
backwards along the raw direction, so its steps shrink near critical points.
Both are stateless: the caller keeps particle positions between calls.
"""

import logging
from typing import Callable

from .grid import Grid
from .vec2 import Vec2

logger = logging.getLogger(__name__)

ScalarField = Callable[[float, float], float]


class VField:
    """Vector field given by component functions ``dx(x, y)`` and ``dy(x, y)``.

    Attributes
    ----------
    dx, dy : ScalarField
        Component functions, defined over the whole coordinate domain
    nudge : float
        Step length in coordinate units
    """

    __slots__ = ('dx', 'dy', 'nudge')

    def __init__(self, dx: ScalarField, dy: ScalarField, nudge: float):
        if not callable(dx) or not callable(dy):
            raise ValueError("dx and dy must be callables of (x, y)")
        if nudge <= 0.0:
            raise ValueError(f"nudge must be positive, got {nudge}")

        self.dx = dx
        self.dy = dy
        self.nudge = float(nudge)

    def __repr__(self) -> str:
        return f"VField(dx={self.dx!r}, dy={self.dy!r}, nudge={self.nudge})"

    def compute(self, pt: Vec2) -> Vec2:
        """Raw (unnormalized) field value at ``pt``."""
        return Vec2(self.dx(pt.x, pt.y), self.dy(pt.x, pt.y))

    def compute_normal(self, pt: Vec2) -> Vec2:
        """Unit direction of the field at ``pt``.

        Raises ``DegenerateGeometryError`` at a stationary point.
        """
        return self.compute(pt).normalize()

    def advance(self, pt: Vec2) -> Vec2:
        """One Euler step of length ``nudge`` along the flow direction."""
        return pt + self.compute_normal(pt) * self.nudge

    def rewind(
        self,
        pt: Vec2,
        iterations: int,
        norm_threshold: float,
        grid: Grid
    ) -> Vec2:
        """Integrate backwards in time from ``pt``.

        Parameters
        ----------
        pt : Vec2
            Starting point in coordinate space
        iterations : int
            Maximum number of steps
        norm_threshold : float
            Stop once the raw field magnitude is at or below this value
        grid : Grid
            Stop once the point leaves ``grid``'s coordinate bounds

        Returns
        -------
        Vec2
            Last position reached. Hitting the iteration cap is not an error.

        Notes
        -----
        Steps are ``nudge`` times the *raw* field value, so the walk slows
        down as it approaches a critical point.
        """
        steps = 0
        for _ in range(iterations):
            if not grid.contains(pt):
                break

            direction = self.compute(pt)
            if direction.norm() <= norm_threshold:
                break

            pt = pt - direction * self.nudge
            steps += 1

        logger.debug(f"rewind: {steps}/{iterations} steps, ended at {pt}")
        return pt
