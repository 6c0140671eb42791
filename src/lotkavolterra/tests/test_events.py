import numpy as np
from pytest import raises

from .. import Simulator, solvers, threshold, to_long

SOLVER = solvers.RK45(atol=1e-9, rtol=1e-9)


def test_unknown_species():
    with raises(ValueError, match="unknown species"):
        threshold("X")


def test_event_function():
    event = threshold("P", 1.0)
    assert event.direction == -1
    assert not event.terminal
    assert event(0, np.array([10, 4]), None, None) == 3


def test_threshold_crossings():
    result = Simulator(solver=SOLVER).solve(events=[threshold("P", 1.0)])
    grid = result[result["event"].isna()]
    crossings = result[result["event"] == 0]

    assert len(grid) == 1001
    assert len(crossings) > 0
    assert np.allclose(crossings["P"], 1.0, atol=1e-6)


def test_terminal_event():
    result = Simulator(solver=SOLVER).solve(
        events=[threshold("V", 1.0, terminal=True)]
    )
    grid = result[result["event"].isna()]
    (t_event,) = result[result["event"] == 0].index

    assert grid.index.max() <= t_event < 50


def test_events_are_time_ordered():
    result = Simulator(solver=SOLVER).solve(events=[threshold("P", 1.0)])
    assert result.index.is_monotonic_increasing

    long = to_long(result)
    assert np.all(np.diff(long["time"].to_numpy()) >= 0)
