from __future__ import annotations

from .model import Array, MutableArray
from .types import SPECIES


def threshold(species: str, level: float = 0.0, *, terminal: bool = False):
    """Event triggered when a population falls below a level.

    The returned function follows SciPy's event protocol
    and receives the same arguments as the right-hand side.

    Parameters
    ----------
    species :
        "V" for prey or "P" for predator.
    level :
        population level to detect. Zero detects extinction.
    terminal :
        whether to stop the integration at the first crossing.
    """
    try:
        index = SPECIES.index(species)
    except ValueError:
        raise ValueError(
            f"unknown species {species!r}, expected one of {SPECIES}"
        ) from None

    def event(t: float, y: Array, p: Array, dy: MutableArray) -> float:
        return y[index] - level

    event.terminal = terminal
    event.direction = -1
    event.__name__ = f"{species}_below_{level}"
    return event
