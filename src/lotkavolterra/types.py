from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Number = numbers.Real

SPECIES = ("V", "P")


@dataclass(frozen=True, kw_only=True)
class Parameters:
    """Rates of the predator-prey model.

    r : intrinsic prey growth rate.
    alpha : predation (capture) efficiency.
    beta : predator conversion efficiency from captured prey.
    q : predator mortality rate.
    """

    r: float = 0.75
    alpha: float = 0.8
    beta: float = 0.5
    q: float = 1.0

    def __post_init__(self):
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, Number):
                raise TypeError(f"unexpected type {type(value)} for {field.name}")
            elif not math.isfinite(value) or value <= 0:
                raise ValueError(f"{field.name} must be positive and finite, got {value}")

    def as_array(self) -> NDArray:
        return np.array([self.r, self.alpha, self.beta, self.q], dtype=float)

    def replace(self, **changes) -> Parameters:
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class State:
    """Prey (V) and predator (P) populations at a single time point."""

    V: float = 10
    P: float = 4

    def as_array(self) -> NDArray:
        return np.array([self.V, self.P], dtype=float)


@dataclass(frozen=True, kw_only=True)
class TimeGrid:
    start: float = 0
    stop: float = 50
    step: float = 0.05

    def __post_init__(self):
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if not self.stop > self.start:
            raise ValueError(
                f"stop ({self.stop}) must be greater than start ({self.start})"
            )
        n = (self.stop - self.start) / self.step
        if not math.isclose(n, round(n), rel_tol=1e-9):
            raise ValueError(
                f"span [{self.start}, {self.stop}] is not a multiple of step {self.step}"
            )

    @property
    def span(self) -> tuple[float, float]:
        return (self.start, self.stop)

    def __len__(self) -> int:
        return round((self.stop - self.start) / self.step) + 1

    def points(self) -> NDArray:
        # linspace keeps both endpoints exact, unlike arange
        return np.linspace(self.start, self.stop, len(self))
