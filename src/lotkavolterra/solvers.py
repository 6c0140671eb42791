from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy import integrate
from scipy_events import Events, solve_ivp
from typing_extensions import assert_never

if TYPE_CHECKING:
    from .simulator import Problem


__all__ = [
    "LSODA",
    "RK45",
    "DOP853",
    "Radau",
    "BDF",
    "RK4",
]

logger = logging.getLogger(__name__)


class IntegrationError(RuntimeError):
    """The solver could not produce a finite solution."""


class Solver(Protocol):
    def __call__(
        self,
        problem: Problem,
        *,
        save_at: NDArray | None = None,
        events: Sequence[Events] = (),
    ) -> Solution: ...


@dataclass
class Solution:
    t: NDArray
    # shape (len(t), number of variables)
    y: NDArray
    t_events: Sequence[NDArray] = ()
    y_events: Sequence[NDArray] = ()


def _check_finite(solution: Solution) -> Solution:
    finite = np.isfinite(solution.y).all(axis=1)
    if not finite.all():
        t = solution.t[np.argmin(finite)]
        raise IntegrationError(f"non-finite population at t={t}")
    return solution


def _solve_ivp_scipy(
    problem: Problem,
    method: type[integrate.OdeSolver],
    options: dict,
    *,
    save_at: NDArray | None = None,
    events: Sequence[Events] = (),
):
    # OdeSolver keeps references to previous evaluations,
    # so each call must return a new array instead of a shared buffer.
    solution = solve_ivp(
        problem.rhs,
        problem.t,
        problem.y,
        method=method,
        t_eval=save_at,
        args=(problem.p, None),
        events=events,
        **options,
    )
    if solution.status == -1:
        raise IntegrationError(solution.message)
    logger.debug("%s: %s", method.__name__, solution.message)
    t_events = solution.t_events if solution.t_events is not None else ()
    y_events = solution.y_events if solution.y_events is not None else ()
    return _check_finite(
        Solution(
            np.asarray(solution.t),
            np.asarray(solution.y).T,
            t_events,
            y_events,
        )
    )


@dataclass(frozen=True, kw_only=True)
class _Base:
    # Relative and absolute tolerences
    rtol: float | NDArray = 1e-3
    atol: float | NDArray = 1e-6
    # Step size. By default, determined by the solver.
    first_step: float | None = None
    max_step: float = np.inf

    def __init_subclass__(cls, *, solver: type[integrate.OdeSolver]) -> None:
        cls._solver_class = solver
        assert cls.__name__ in __all__, cls.__name__

    def __call__(
        self,
        problem: Problem,
        *,
        save_at: NDArray | None = None,
        events: Sequence[Events] = (),
    ):
        return _solve_ivp_scipy(
            problem,
            self._solver_class,
            options={
                "rtol": self.rtol,
                "atol": self.atol,
                "first_step": self.first_step,
                "max_step": self.max_step,
            },
            save_at=save_at,
            events=events,
        )


@dataclass(frozen=True, kw_only=True)
class LSODA(_Base, solver=integrate.LSODA):
    """Adams/BDF method with automatic stiffness detection and switching.

    This is a wrapper to SciPy's LSODA, which in turn is a wrapper of ODEPACK's Fortran solver.
    """

    min_step: float = 0
    implementation: Literal["LSODA", "odeint", None] = None

    def __call__(
        self,
        problem: Problem,
        *,
        save_at: NDArray | None = None,
        events: Sequence[Events] = (),
    ):
        match self.implementation:
            case "LSODA":
                return self._LSODA(problem, save_at=save_at, events=events)
            case "odeint":
                if len(events) > 0:
                    raise TypeError("events are not supported by odeint")
                if save_at is None:
                    raise TypeError("provide an array of evaluation points for odeint")
                return self._odeint(problem, save_at=save_at)
            case None:
                if save_at is None or len(events) > 0:
                    return self._LSODA(problem, save_at=save_at, events=events)
                else:
                    return self._odeint(problem, save_at=save_at)
            case _:
                assert_never(self.implementation)

    def _LSODA(
        self,
        problem: Problem,
        *,
        save_at: NDArray | None = None,
        events: Sequence[Events] = (),
    ):
        return _solve_ivp_scipy(
            problem,
            self._solver_class,
            options=dict(
                rtol=self.rtol,
                atol=self.atol,
                first_step=self.first_step,
                max_step=self.max_step,
                min_step=self.min_step,
            ),
            save_at=save_at,
            events=events,
        )

    def _odeint(
        self,
        problem: Problem,
        *,
        save_at: NDArray,
    ):
        # odeint starts from the first evaluation point
        t0 = problem.t[0]
        offset = save_at[0] != t0
        t = np.concatenate(([t0], save_at)) if offset else save_at

        dy = np.empty_like(problem.y)
        y, info = integrate.odeint(
            problem.rhs,
            tfirst=True,
            t=t,
            y0=problem.y,
            args=(problem.p, dy),
            atol=self.atol,
            rtol=self.rtol,
            h0=self.first_step if self.first_step is not None else 0,
            hmin=self.min_step,
            hmax=self.max_step if self.max_step is not np.inf else 0,
            full_output=True,
        )
        if info["message"] != "Integration successful.":
            raise IntegrationError(info["message"])
        logger.debug("odeint finished with %d evaluations", info["nfe"][-1])
        if offset:
            y = y[1:]
        return _check_finite(Solution(save_at, y))


@dataclass(frozen=True, kw_only=True)
class RK45(_Base, solver=integrate.RK45):
    """Explicit Runge-Kutta method of order 5(4).

    This is a wrapper to SciPy's RK45.
    """


@dataclass(frozen=True, kw_only=True)
class DOP853(_Base, solver=integrate.DOP853):
    """Explicit Runge-Kutta method of order 8.

    This is a wrapper to SciPy's DOP853.
    """


@dataclass(frozen=True, kw_only=True)
class Radau(_Base, solver=integrate.Radau):
    """Implicit Runge-Kutta method of Radau IIA family of order 5.

    This is a wrapper to SciPy's Radau.
    """


@dataclass(frozen=True, kw_only=True)
class BDF(_Base, solver=integrate.BDF):
    """Implicit method based on backward-differentiation formulas.

    This is a wrapper to SciPy's BDF.
    """


@dataclass(frozen=True, kw_only=True)
class RK4:
    """Classic fixed-step Runge-Kutta method of order 4.

    Takes ``substeps`` equal steps between consecutive evaluation points.
    """

    substeps: int = 1

    def __post_init__(self):
        if self.substeps < 1:
            raise ValueError(f"substeps must be at least 1, got {self.substeps}")

    def __call__(
        self,
        problem: Problem,
        *,
        save_at: NDArray | None = None,
        events: Sequence[Events] = (),
    ):
        if len(events) > 0:
            raise TypeError("events are not supported by RK4")
        if save_at is None:
            raise TypeError("provide an array of evaluation points for RK4")

        rhs = problem.rhs
        p = problem.p
        dy = np.empty_like(problem.y)

        def f(t, y):
            return np.array(rhs(t, y, p, dy), dtype=float)

        y = np.array(problem.y, dtype=float)
        out = np.empty((save_at.size, y.size), dtype=float)
        t = problem.t[0]
        for i, t_next in enumerate(save_at):
            h = (t_next - t) / self.substeps
            for _ in range(self.substeps if h != 0 else 0):
                k1 = f(t, y)
                k2 = f(t + h / 2, y + h * k1 / 2)
                k3 = f(t + h / 2, y + h * k2 / 2)
                k4 = f(t + h, y + h * k3)
                y = y + (h / 6) * (k1 + 2 * k2 + 2 * k3 + k4)
                t = t + h
            t = t_next
            out[i] = y
        return _check_finite(Solution(np.asarray(save_at), out))
