"""PV Module Simulation Core.

Numerical layer that turns datasheet parameters into I-V and P-V curves.

Modules:
- lambert_w: Barry et al. (2000) approximation of the Lambert W function
- corrections: STC to operating-point parameter corrections
- diode_models: SDM, DDM, TDM Newton-Raphson solvers and Lambert W solution
- iv_curve: Voltage sweep, MPP scan and curve analysis
- simulation: Input validation, orchestration and result packaging
"""

from .lambert_w import lambert_w_barry, lambert_w_barry_array
from .corrections import (
    OperatingPointParameters,
    ThermalCorrector,
    calculate_operating_parameters,
    estimate_operating_voc,
)
from .diode_models import (
    ModelType,
    MODEL_NAMES,
    get_model_name,
    single_diode,
    double_diode,
    triple_diode,
    multi_diode,
    lambert_w_explicit,
    solve_current,
)
from .iv_curve import IVCurveAnalyzer, build_voltage_grid, find_mpp_index
from .simulation import (
    InvalidInputError,
    ModuleParameters,
    CurveSample,
    SimulationResult,
    simulate,
    simulate_many,
    compare_models,
)

__all__ = [
    # Lambert W
    "lambert_w_barry",
    "lambert_w_barry_array",
    # Corrections
    "OperatingPointParameters",
    "ThermalCorrector",
    "calculate_operating_parameters",
    "estimate_operating_voc",
    # Diode models
    "ModelType",
    "MODEL_NAMES",
    "get_model_name",
    "single_diode",
    "double_diode",
    "triple_diode",
    "multi_diode",
    "lambert_w_explicit",
    "solve_current",
    # I-V curve
    "IVCurveAnalyzer",
    "build_voltage_grid",
    "find_mpp_index",
    # Simulation
    "InvalidInputError",
    "ModuleParameters",
    "CurveSample",
    "SimulationResult",
    "simulate",
    "simulate_many",
    "compare_models",
]
