from . import solvers
from .events import threshold
from .model import derivative, equilibrium, first_integral
from .plotting import phase_plot, plot
from .printing.table import summary
from .reshape import to_long, to_wide
from .simulator import Run, Simulator
from .solvers import IntegrationError
from .types import SPECIES, Parameters, State, TimeGrid

__all__ = [
    "SPECIES",
    "IntegrationError",
    "Parameters",
    "Run",
    "Simulator",
    "State",
    "TimeGrid",
    "derivative",
    "equilibrium",
    "first_integral",
    "phase_plot",
    "plot",
    "solvers",
    "summary",
    "threshold",
    "to_long",
    "to_wide",
]
