"""Named analytic vector fields.

Each entry is a pair of pure functions ``(dx, dy)`` of (x, y). Configs and
the CLI pick a field by name; ``saddle_spiral`` is the default look.
"""

import math
from typing import Dict, List, Tuple

from .vector_field import ScalarField, VField

FieldPair = Tuple[ScalarField, ScalarField]


def _saddle_spiral_dx(x: float, y: float) -> float:
    return (2.0 + x) * (y - x)


def _saddle_spiral_dy(x: float, y: float) -> float:
    return (4.0 - x) * (y + x)


def _vortex_dx(x: float, y: float) -> float:
    return -y


def _vortex_dy(x: float, y: float) -> float:
    return x


def _saddle_dx(x: float, y: float) -> float:
    return x


def _saddle_dy(x: float, y: float) -> float:
    return -y


def _waves_dx(x: float, y: float) -> float:
    return 1.0


def _waves_dy(x: float, y: float) -> float:
    return math.sin(x)


FIELDS: Dict[str, FieldPair] = {
    'saddle_spiral': (_saddle_spiral_dx, _saddle_spiral_dy),
    'vortex': (_vortex_dx, _vortex_dy),
    'saddle': (_saddle_dx, _saddle_dy),
    'waves': (_waves_dx, _waves_dy),
}

DEFAULT_FIELD = 'saddle_spiral'


def available_fields() -> List[str]:
    """Sorted list of registered field names."""
    return sorted(FIELDS)


def get_field(name: str) -> FieldPair:
    """Look up ``(dx, dy)`` by name.

    Raises
    ------
    KeyError
        If ``name`` is not registered (message lists valid names)
    """
    try:
        return FIELDS[name]
    except KeyError:
        raise KeyError(
            f"Unknown field '{name}'. Available: {', '.join(available_fields())}"
        ) from None


def make_vfield(name: str, nudge: float) -> VField:
    """Build a ``VField`` for a registered field."""
    dx, dy = get_field(name)
    return VField(dx, dy, nudge)
