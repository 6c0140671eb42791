from __future__ import annotations

from typing import Mapping

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.axes import Axes

from .model import equilibrium
from .types import SPECIES, Parameters

LINEWIDTH = 2.5
COLORS = {"V": "tab:blue", "P": "tab:red"}


def plot(
    long: pd.DataFrame,
    *,
    ax: Axes | None = None,
    linewidth: float = LINEWIDTH,
    colors: Mapping[str, str] | None = None,
) -> Axes:
    """Draw one line per species against time.

    Parameters
    ----------
    long :
        long-form table with ``time``, ``species`` and ``population`` columns.
    ax :
        axes to draw on. Defaults to the current axes.
    linewidth :
        line width, thicker than matplotlib's default.
    colors :
        color per species.
    """
    if ax is None:
        ax = plt.gca()
    if colors is None:
        colors = COLORS

    for species, group in long.groupby("species", observed=True, sort=False):
        ax.plot(
            group["time"].to_numpy(),
            group["population"].to_numpy(),
            color=colors.get(species),
            linewidth=linewidth,
            label=str(species),
        )
    ax.set_xlabel("time")
    ax.set_ylabel("population")
    ax.legend(title="species")
    return ax


def phase_plot(
    trajectory: pd.DataFrame,
    *,
    parameters: Parameters | None = None,
    ax: Axes | None = None,
    linewidth: float = LINEWIDTH,
) -> Axes:
    """Draw the predator population against the prey population."""
    if ax is None:
        ax = plt.gca()

    prey, predator = SPECIES
    ax.plot(
        trajectory[prey].to_numpy(),
        trajectory[predator].to_numpy(),
        linewidth=linewidth,
    )
    if parameters is not None:
        fixed = equilibrium(parameters)
        ax.plot([fixed.V], [fixed.P], marker="o", color="k", linestyle="none")
    ax.set_xlabel(prey)
    ax.set_ylabel(predator)
    return ax
