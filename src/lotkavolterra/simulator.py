from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray
from scipy_events import Events

from . import solvers
from .model import RHS, derivative
from .plotting import plot as plot_long
from .reshape import to_long
from .types import SPECIES, Parameters, State, TimeGrid

if TYPE_CHECKING:
    from matplotlib.axes import Axes

logger = logging.getLogger(__name__)


@dataclass
class Problem:
    rhs: RHS
    t: tuple[float, float]
    y: NDArray
    p: NDArray


@dataclass(frozen=True)
class Run:
    parameters: Parameters
    initial: State
    trajectory: pd.DataFrame
    long: pd.DataFrame
    ax: Axes | None = None


class Simulator:
    def __init__(
        self,
        parameters: Parameters = Parameters(),
        /,
        *,
        solver: solvers.Solver = solvers.LSODA(),
    ):
        self.parameters = parameters
        self.solver = solver

    def create_problem(
        self,
        initial: State = State(),
        *,
        parameters: Parameters | None = None,
        t_span: tuple[float, float] = (0, np.inf),
    ) -> Problem:
        if parameters is None:
            parameters = self.parameters
        logger.debug("problem %s from %s over %s", parameters, initial, t_span)
        return Problem(
            rhs=derivative,
            t=t_span,
            y=initial.as_array(),
            p=parameters.as_array(),
        )

    def solve(
        self,
        initial: State = State(),
        *,
        parameters: Parameters | None = None,
        grid: TimeGrid | None = None,
        save_at: ArrayLike | None = None,
        t_span: tuple[float, float] | None = None,
        solver: solvers.Solver | None = None,
        events: Sequence[Events] = (),
    ) -> pd.DataFrame:
        if solver is None:
            solver = self.solver

        if save_at is not None:
            save_at = np.asarray(save_at, dtype=float)
            if save_at.ndim != 1 or save_at.size == 0:
                raise ValueError("save_at must be a non-empty 1d array.")
            if np.any(np.diff(save_at) <= 0):
                raise ValueError("save_at must be strictly increasing.")
        elif grid is not None:
            save_at = grid.points()
        elif t_span is None:
            save_at = TimeGrid().points()

        if t_span is None:
            t_span = (save_at[0], save_at[-1])

        problem = self.create_problem(initial, parameters=parameters, t_span=t_span)
        solution = solver(problem, save_at=save_at, events=events)

        def _convert(t, y):
            return pd.DataFrame(
                np.reshape(y, (-1, len(SPECIES))),
                columns=list(SPECIES),
                index=pd.Index(np.asarray(t, dtype=float), name="time"),
            )

        df = _convert(solution.t, solution.y)
        if len(events) > 0:
            df_events = (
                _convert(t, y).assign(event=i)
                for i, (t, y) in enumerate(zip(solution.t_events, solution.y_events))
            )
            df = pd.concat([df.assign(event=pd.NA), *df_events])
            df = df.sort_index(kind="stable")
        return df

    def run(
        self,
        initial: State = State(),
        *,
        parameters: Parameters | None = None,
        grid: TimeGrid = TimeGrid(),
        solver: solvers.Solver | None = None,
        plot: bool = True,
        ax: Axes | None = None,
    ) -> Run:
        """Integrate, reshape and render a single run.

        Integration failures propagate as solvers.IntegrationError.
        """
        if parameters is None:
            parameters = self.parameters
        trajectory = self.solve(
            initial, parameters=parameters, grid=grid, solver=solver
        )
        long = to_long(trajectory)
        if plot:
            ax = plot_long(long, ax=ax)
        else:
            ax = None
        logger.info(
            "solved %d points on [%g, %g] for %s", len(trajectory), *grid.span, parameters
        )
        return Run(
            parameters=parameters,
            initial=initial,
            trajectory=trajectory,
            long=long,
            ax=ax,
        )
