import matplotlib.pyplot as plt

from lotkavolterra import Parameters, Simulator, State, TimeGrid, summary
from lotkavolterra.logging_config import setup_logging

scenarios = {
    "A": Parameters(r=0.75, alpha=0.8, beta=0.5, q=1),
    "B": Parameters(r=1, alpha=0.8, beta=0.5, q=0.5),
}


if __name__ == "__main__":
    setup_logging()

    sim = Simulator()
    fig, axes = plt.subplots(1, len(scenarios), sharey=True, figsize=(10, 4))
    for ax, (name, parameters) in zip(axes, scenarios.items()):
        run = sim.run(
            State(V=10, P=4),
            parameters=parameters,
            grid=TimeGrid(start=0, stop=50, step=0.05),
            ax=ax,
        )
        ax.set_title(f"Scenario {name}")
        print(summary(run.trajectory, parameters))
    plt.show()
