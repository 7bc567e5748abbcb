"""PV Module Simulation.

Runs the full chain for one module definition:
1. Input validation
2. Thermal/irradiance correction of the circuit parameters
3. Voltage sweep from 0 to 105% of the operating Voc estimate
4. Diode-model solution at every voltage sample
5. Power curve, maximum power point and figures of merit

Each call is a pure function of its ModuleParameters.
"""

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from config.config import SIMULATION_CONFIG
from config.pv_constants import PHYSICS, SOLVER_SETTINGS, STC, SolverSettings
from .corrections import calculate_operating_parameters, estimate_operating_voc
from .diode_models import ModelType, get_model_name, solve_current
from .iv_curve import IVCurveAnalyzer, build_voltage_grid

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Module parameters violate a structural invariant."""


@dataclass(frozen=True)
class ModuleParameters:
    """Datasheet and operating-condition inputs of one simulation."""
    referencia: str
    isc: float  # Short-circuit current at STC (A)
    voc: float  # Open-circuit voltage at STC (V)
    marca: str = ""
    vm: float = 0.0  # Voltage at MPP, datasheet (V)
    im: float = 0.0  # Current at MPP, datasheet (A)
    gop: float = STC.irradiance  # Operating irradiance (W/m²)
    top: float = STC.temperature  # Operating cell temperature (°C)
    alpha_i: float = 0.0  # Isc temperature coefficient (%/°C)
    beta_v: float = 0.0  # Voc temperature coefficient (V/°C)
    acelda: float = 0.0  # Cell area (m²)
    ns: int = 1  # Cells in series
    np: int = 1  # Cells in parallel
    n: float = 1.0  # Diode ideality factor
    rs: float = 0.0  # Series resistance (Ω)
    rsh: float = 1000.0  # Shunt resistance (Ω)
    pmax: float = 0.0  # Datasheet maximum power (W); 0 derives it from vm * im
    modelo: ModelType = ModelType(SIMULATION_CONFIG["default_model"])

    def __post_init__(self):
        object.__setattr__(self, "modelo", ModelType.parse(self.modelo))

    @property
    def reference_power(self) -> float:
        """Datasheet power used to rate the simulation: Pmax, else Vm * Im."""
        return self.pmax if self.pmax > 0 else self.vm * self.im

    def replace(self, **changes) -> "ModuleParameters":
        """Copy with some fields changed."""
        return replace(self, **changes)

    def validate(self) -> None:
        """Check the structural invariants.

        Raises:
            InvalidInputError: With a human-readable cause
        """
        if not self.referencia or not self.referencia.strip():
            raise InvalidInputError("Ingrese la referencia del módulo.")
        if self.isc <= 0 or self.voc <= 0:
            raise InvalidInputError("Isc y Voc deben ser positivos.")
        if self.ns <= 0 or self.np <= 0:
            raise InvalidInputError("El número de celdas debe ser mayor que cero.")
        if self.gop <= 0:
            raise InvalidInputError("La irradiancia de operación debe ser positiva.")
        if self.n <= 0:
            raise InvalidInputError("El factor de idealidad debe ser positivo.")
        if self.rsh <= 0:
            raise InvalidInputError("La resistencia shunt debe ser positiva.")
        if self.rs < 0:
            raise InvalidInputError("La resistencia serie no puede ser negativa.")


class CurveSample(NamedTuple):
    """One point of the simulated curve."""
    voltage: float
    current: float
    power: float


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Curves and figures of merit of one simulation."""
    voltage: np.ndarray = field(repr=False)
    current: np.ndarray = field(repr=False)
    power: np.ndarray = field(repr=False)
    vmpp: float
    impp: float
    pmax_calc: float
    fill_factor: float
    efficiency: float  # %
    error_percent: float  # % deviation from the datasheet power
    iph: float  # A
    i0: float  # A
    jsc: float  # mA/cm²
    atotal: float  # m²
    model_name: str
    modelo: ModelType
    gstc: float = STC.irradiance
    tstc_c: float = STC.temperature
    eg: float = PHYSICS.eg
    q: float = PHYSICS.q
    k: float = PHYSICS.k

    def __len__(self) -> int:
        return len(self.voltage)

    def samples(self) -> Iterator[CurveSample]:
        """Iterate the curve in ascending voltage order."""
        for v, i, p in zip(self.voltage, self.current, self.power):
            yield CurveSample(float(v), float(i), float(p))

    @property
    def mpp(self) -> CurveSample:
        """Maximum power point."""
        return CurveSample(self.vmpp, self.impp, self.pmax_calc)

    def is_error_acceptable(self, threshold: Optional[float] = None) -> bool:
        """Whether the deviation from the datasheet power is below the threshold."""
        if threshold is None:
            threshold = SIMULATION_CONFIG["acceptable_error_percent"]
        return self.error_percent < threshold


def _read_only(values: np.ndarray) -> np.ndarray:
    values = np.array(values, dtype=float)
    values.flags.writeable = False
    return values


def simulate(params: ModuleParameters, settings: SolverSettings = SOLVER_SETTINGS) -> SimulationResult:
    """Simulate the I-V and P-V curves of a module.

    Args:
        params: Module definition and operating conditions
        settings: Solver thresholds

    Returns:
        SimulationResult

    Raises:
        InvalidInputError: When the parameters violate an invariant; raised
            before any numeric work
    """
    params.validate()
    start = time.perf_counter()

    op = calculate_operating_parameters(
        isc=params.isc,
        voc=params.voc,
        rs=params.rs,
        rsh=params.rsh,
        n=params.n,
        ns=params.ns,
        irradiance=params.gop,
        temperature=params.top,
        alpha_percent=params.alpha_i,
    )

    voc_op = estimate_operating_voc(params.voc, params.beta_v, params.top)
    voltage = build_voltage_grid(
        voc_op,
        num_points=SIMULATION_CONFIG["num_points"],
        margin=SIMULATION_CONFIG["voltage_margin"],
    )

    current = solve_current(params.modelo, voltage, op, params.n, params.ns, settings)
    analyzer = IVCurveAnalyzer(voltage, current)
    power = analyzer.power
    vmpp, impp, pmax_calc = analyzer.find_mpp()

    fill_factor = analyzer.fill_factor(params.voc, params.isc)

    atotal = params.acelda * params.ns * params.np
    efficiency = (pmax_calc / (params.gop * atotal)) * 100 if atotal > 0 else math.nan

    # mA/cm²
    atotal_cm2 = params.acelda * 10000 * params.ns * params.np
    jsc = (params.isc * 1000) / atotal_cm2 if atotal_cm2 > 0 else math.nan

    reference_power = params.reference_power
    if reference_power > 0:
        error_percent = abs((pmax_calc - reference_power) / reference_power) * 100
    else:
        error_percent = math.nan

    result = SimulationResult(
        voltage=_read_only(voltage),
        current=_read_only(current),
        power=_read_only(power),
        vmpp=vmpp,
        impp=impp,
        pmax_calc=pmax_calc,
        fill_factor=fill_factor,
        efficiency=efficiency,
        error_percent=error_percent,
        iph=op.iph,
        i0=op.i0,
        jsc=jsc,
        atotal=atotal,
        model_name=get_model_name(params.modelo),
        modelo=params.modelo,
    )

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.debug(
        "Simulated %s with %s: Pmax=%.3f W at %.3f V (%.2f ms)",
        params.referencia, params.modelo.value, pmax_calc, vmpp, duration_ms,
        extra={
            "referencia": params.referencia,
            "modelo": params.modelo.value,
            "duration_ms": duration_ms,
        },
    )
    return result


def simulate_many(params_list: Sequence[ModuleParameters],
                  max_workers: Optional[int] = None,
                  settings: SolverSettings = SOLVER_SETTINGS) -> List[SimulationResult]:
    """Run independent simulations concurrently.

    Results are returned in input order. The first InvalidInputError
    encountered is propagated.
    """
    if not params_list:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda p: simulate(p, settings), params_list))


def compare_models(params: ModuleParameters,
                   models: Optional[Sequence[Union[ModelType, str]]] = None,
                   settings: SolverSettings = SOLVER_SETTINGS) -> Dict[ModelType, SimulationResult]:
    """Simulate one module under several models.

    Args:
        params: Module definition; its own model selection is overridden
        models: Models to run (default: all four)

    Returns:
        {ModelType: SimulationResult}
    """
    if models is None:
        models = list(ModelType)
    results = {}
    for model in models:
        model = ModelType.parse(model)
        results[model] = simulate(params.replace(modelo=model), settings)
    return results
