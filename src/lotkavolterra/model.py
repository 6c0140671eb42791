from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Protocol, TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .types import Parameters, State

Array: TypeAlias = Sequence[float]
MutableArray: TypeAlias = MutableSequence[float]


class RHS(Protocol):
    def __call__(self, t: float, y: Array, p: Array, dy: MutableArray) -> Array: ...


def derivative(t: float, y: Array, p: Array, dy: MutableArray | None = None):
    """Right-hand side of the Lotka-Volterra equations.

    Parameters
    ----------
    t :
        time. Unused, the system is autonomous.
    y :
        state ``[V, P]``.
    p :
        parameters ``[r, alpha, beta, q]``.
    dy :
        output buffer. Allocated if not given.

    Returns
    -------
    dy
        ``[dV/dt, dP/dt]``.
    """
    if dy is None:
        dy = np.empty(2, dtype=float)
    V, P = y[0], y[1]
    r, alpha, beta, q = p[0], p[1], p[2], p[3]
    dy[0] = r * V - alpha * V * P
    dy[1] = beta * V * P - q * P
    return dy


def equilibrium(parameters: Parameters) -> State:
    """Coexistence fixed point, where both derivatives vanish."""
    return State(V=parameters.q / parameters.beta, P=parameters.r / parameters.alpha)


def first_integral(parameters: Parameters, V: ArrayLike, P: ArrayLike) -> NDArray:
    """Quantity conserved along every orbit with positive populations."""
    V = np.asarray(V, dtype=float)
    P = np.asarray(P, dtype=float)
    return (
        parameters.beta * V
        - parameters.q * np.log(V)
        + parameters.alpha * P
        - parameters.r * np.log(P)
    )
