import matplotlib.pyplot as plt

from lotkavolterra import Parameters, Simulator, State, phase_plot, solvers, threshold

if __name__ == "__main__":
    parameters = Parameters()
    sim = Simulator(parameters, solver=solvers.DOP853(rtol=1e-9, atol=1e-9))

    ax = plt.gca()
    for V in (3, 6):
        phase_plot(sim.solve(State(V=V, P=4)), ax=ax)
    phase_plot(sim.solve(State(V=10, P=4)), parameters=parameters, ax=ax)

    result = sim.solve(events=[threshold("P", 0.1)])
    print(result[result["event"].notna()])
    plt.show()
