from typing import Sequence

import numpy as np
import pandas as pd
from tabulate import TableFormat, tabulate

from ..types import SPECIES, Parameters


class Table:
    def __init__(
        self,
        *,
        table: Sequence[Sequence],
        headers: Sequence[str],
        title: str | None = None,
    ):
        self.table = table
        self.headers = headers
        self.title = title

    def as_table(self, *, tablefmt: TableFormat | str, **kwargs):
        return tabulate(self.table, headers=self.headers, tablefmt=tablefmt, **kwargs)

    def __repr__(self):
        table = self.as_table(tablefmt="simple")
        if self.title is None:
            return table
        _, header_separator, _ = table.split("\n", maxsplit=2)
        sep = "-" * len(header_separator)
        return f"{self.title}\n{sep}\n{table}"

    def _repr_html_(self):
        table = self.as_table(tablefmt="html")
        if self.title is None:
            return table

        n = len(self.headers)
        title_row = f'\n<colgroup span="{n}"></colgroup><tr><th colspan="{n}" scope="colgroup">{self.title}</th></tr>'
        a, b, c = table.partition("<thead>")
        return f"{a}{b}{title_row}{c}"


def estimate_period(time: np.ndarray, x: np.ndarray) -> float:
    """Mean interval between upward crossings of the mean value.

    NaN if there are fewer than two crossings.
    """
    centered = x - x.mean()
    upward = np.flatnonzero((centered[:-1] < 0) & (centered[1:] >= 0))
    if upward.size < 2:
        return np.nan
    # linear interpolation of each crossing time
    t0, t1 = time[upward], time[upward + 1]
    x0, x1 = centered[upward], centered[upward + 1]
    crossings = t0 - x0 * (t1 - t0) / (x1 - x0)
    return float(np.diff(crossings).mean())


def summary(trajectory: pd.DataFrame, parameters: Parameters | None = None) -> Table:
    time = trajectory.index.to_numpy(dtype=float)
    rows = []
    for species in SPECIES:
        x = trajectory[species].to_numpy(dtype=float)
        rows.append([species, x.min(), x.max(), x.mean(), estimate_period(time, x)])

    title = None
    if parameters is not None:
        title = ", ".join(
            f"{k}={getattr(parameters, k):g}" for k in ("r", "alpha", "beta", "q")
        )
    return Table(
        table=rows,
        headers=["species", "min", "max", "mean", "period"],
        title=title,
    )
