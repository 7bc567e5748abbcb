"""PV Module I-V Simulator.

Equivalent-circuit simulation of photovoltaic modules from datasheet values:
single-, double- and triple-diode Newton-Raphson solvers and an explicit
Lambert W solution, with thermal/irradiance parameter corrections.
"""

__version__ = "1.0.0"
__author__ = "Ganesh Gowri"

from .analysis.simulation import (
    InvalidInputError,
    ModuleParameters,
    SimulationResult,
    simulate,
)
from .analysis.diode_models import ModelType

__all__ = [
    "InvalidInputError",
    "ModuleParameters",
    "SimulationResult",
    "ModelType",
    "simulate",
]
