import numpy as np
import pandas as pd
from pytest import raises

from .. import Parameters, Simulator, State, TimeGrid, first_integral, solvers

SCENARIO_A = Parameters(r=0.75, alpha=0.8, beta=0.5, q=1)
SCENARIO_B = SCENARIO_A.replace(r=1, q=0.5)
INITIAL = State(V=10, P=4)
SOLVER = solvers.DOP853(atol=1e-10, rtol=1e-10)


def n_extrema(x):
    return np.count_nonzero(np.diff(np.sign(np.diff(x))) != 0)


def test_trajectory_shape():
    result = Simulator(SCENARIO_A).solve(INITIAL)
    assert isinstance(result, pd.DataFrame)
    assert len(result) == 1001
    assert list(result.columns) == ["V", "P"]
    assert result.index.name == "time"
    assert np.array_equal(result.index, TimeGrid().points())
    assert result.iloc[0].tolist() == [10, 4]


def test_scenario_a_is_bounded_and_oscillates():
    result = Simulator(SCENARIO_A, solver=SOLVER).solve(INITIAL)
    for species in ("V", "P"):
        x = result[species].to_numpy()
        assert np.all(np.isfinite(x))
        assert x.min() > 0
        assert x.max() < 100
        assert n_extrema(x) >= 3


def test_scenario_a_orbit_is_closed():
    result = Simulator(SCENARIO_A, solver=SOLVER).solve(INITIAL)
    h = first_integral(SCENARIO_A, result["V"], result["P"])
    assert np.allclose(h, h[0], rtol=1e-5)


def test_scenarios_differ():
    sim = Simulator(solver=SOLVER)
    a = sim.solve(INITIAL, parameters=SCENARIO_A)
    b = sim.solve(INITIAL, parameters=SCENARIO_B)
    assert np.array_equal(a.index, b.index)
    assert a.iloc[0].equals(b.iloc[0])
    assert np.abs(a.to_numpy() - b.to_numpy()).max() > 1e-3


def test_deterministic():
    sim = Simulator(SCENARIO_A)
    first = sim.solve(INITIAL)
    second = sim.solve(INITIAL)
    assert np.allclose(first, second, rtol=0, atol=1e-9)


def test_parameters_override():
    sim = Simulator(SCENARIO_A)
    problem = sim.create_problem(INITIAL, parameters=SCENARIO_B)
    assert np.array_equal(problem.p, SCENARIO_B.as_array())
    assert np.array_equal(sim.create_problem(INITIAL).p, SCENARIO_A.as_array())
    assert np.array_equal(problem.y, [10, 4])


def test_extinct_prey():
    result = Simulator(solver=SOLVER).solve(State(V=0, P=4))
    assert np.all(result["V"] == 0)
    # predators decay exponentially without prey
    t = result.index.to_numpy()
    assert np.allclose(result["P"], 4 * np.exp(-SCENARIO_A.q * t), rtol=1e-6)


def test_grid():
    grid = TimeGrid(start=0, stop=5, step=0.5)
    result = Simulator().solve(grid=grid)
    assert np.array_equal(result.index, grid.points())


def test_t_span():
    result = Simulator().solve(t_span=(0, 5), solver=solvers.RK45())
    assert result.index[0] == 0
    assert result.index[-1] == 5


def test_invalid_save_at():
    with raises(ValueError, match="increasing"):
        Simulator().solve(save_at=[0, 2, 1])

    with raises(ValueError, match="non-empty"):
        Simulator().solve(save_at=[])


def test_run_without_plot():
    run = Simulator(SCENARIO_A).run(INITIAL, plot=False)
    assert run.ax is None
    assert run.parameters is SCENARIO_A
    assert run.initial is INITIAL
    assert len(run.trajectory) == 1001
    assert len(run.long) == 2 * 1001
