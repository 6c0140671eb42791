import pandas as pd

from .types import SPECIES


def to_long(trajectory: pd.DataFrame) -> pd.DataFrame:
    """Pivot a trajectory into one row per time and species.

    Parameters
    ----------
    trajectory :
        indexed by time, with one column per species.

    Returns
    -------
    pd.DataFrame
        columns ``time``, ``species`` and ``population``, sorted by time
        and, within each time, by species in state order.
    """
    wide = trajectory.loc[:, list(SPECIES)]
    time = wide.index.to_numpy()
    n = len(wide)
    return pd.DataFrame(
        {
            "time": time.repeat(len(SPECIES)),
            "species": pd.Categorical(
                list(SPECIES) * n, categories=SPECIES, ordered=True
            ),
            "population": wide.to_numpy().ravel(),
        }
    )


def to_wide(long: pd.DataFrame) -> pd.DataFrame:
    """Inverse of to_long."""
    wide = long.pivot(index="time", columns="species", values="population")
    wide = wide.loc[:, list(SPECIES)]
    wide.columns = pd.Index(list(SPECIES))
    return wide.rename_axis(index="time")
