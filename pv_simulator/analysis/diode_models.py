"""Diode Equivalent-Circuit Models.

Map a voltage sweep to module current by solving the implicit circuit
equation at every voltage sample:
- SDM: single diode, Newton-Raphson (Abbassi et al., 2017)
- DDM: two recombination paths A1=1, A2=2, Newton-Raphson
- TDM: three recombination paths A1=1, A2=1.2, A3=2.5 (Olayiwola et al., 2024)
- LAMBERT: explicit single-diode solution through the Lambert W function
  (Barry et al., 2000)

Every solver is a pure function of the voltage array and the operating-point
parameters and returns a current array of the same length clamped at zero.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Tuple, Union

import numpy as np

from config.pv_constants import (
    DDM_MULTIPLIERS,
    SOLVER_SETTINGS,
    TDM_MULTIPLIERS,
    DiodeMultipliers,
    SolverSettings,
)
from .corrections import OperatingPointParameters
from .lambert_w import lambert_w_barry_array

logger = logging.getLogger(__name__)

# Residual f(V, I) and its derivative df/dI, evaluated element-wise
Residual = Callable[[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]


class ModelType(Enum):
    """Equivalent-circuit model variants."""
    SDM = "sdm"  # Single diode
    DDM = "ddm"  # Double diode
    TDM = "tdm"  # Triple diode
    LAMBERT = "lambert"  # Explicit Lambert W solution

    @classmethod
    def parse(cls, value: Union["ModelType", str]) -> "ModelType":
        """Resolve an enum member or its string tag.

        Raises:
            ValueError: For an unrecognized model tag
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown model '{value}'. Valid models: {valid}") from None


MODEL_NAMES: Dict[ModelType, str] = {
    ModelType.SDM: "Modelo de 1 Diodo (SDM)",
    ModelType.DDM: "Modelo de 2 Diodos (DDM)",
    ModelType.TDM: "Modelo de 3 Diodos (TDM)",
    ModelType.LAMBERT: "Lambert W - Expansión analítica de Barry",
}


def get_model_name(model: Union[ModelType, str]) -> str:
    """Display name of a model."""
    return MODEL_NAMES[ModelType.parse(model)]


def _newton_raphson(voltage: np.ndarray,
                    initial: np.ndarray,
                    residual: Residual,
                    settings: SolverSettings) -> np.ndarray:
    """Bounded Newton-Raphson iteration, independent for every voltage sample.

    A sample stops iterating once its update is below the tolerance (the
    update is kept) or its derivative is near-singular (the previous iterate
    is kept). A non-finite update means the diode exponential overflowed,
    which only happens past the open-circuit point; that sample is set to
    zero current. Samples still active after max_iterations keep their last
    iterate.
    """
    current = np.array(initial, dtype=float)
    active = np.ones(current.shape, dtype=bool)

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        for _ in range(settings.max_iterations):
            if not active.any():
                break

            idx = np.flatnonzero(active)
            f, df = residual(voltage[idx], current[idx])

            singular = np.abs(df) < settings.derivative_floor
            active[idx[singular]] = False

            step_idx = idx[~singular]
            updated = current[step_idx] - f[~singular] / df[~singular]
            overflowed = ~np.isfinite(updated)
            updated[overflowed] = 0.0
            converged = (np.abs(updated - current[step_idx]) < settings.tolerance) | overflowed
            current[step_idx] = updated
            active[step_idx[converged]] = False

    return current


def _multi_diode_residual(iph: float,
                          i0: float,
                          rs: float,
                          rsh: float,
                          scales: Tuple[float, ...]) -> Residual:
    """Residual of a circuit with one exponential term per diode scale.

    f(I) = Iph - I0 * (sum(exp(Vd / s)) - m) - Vd / Rsh - I,  Vd = V + I Rs

    With I0 = 0 the diode terms vanish.
    """
    if i0 == 0:
        scales = ()
    offset = len(scales)

    def residual(v: np.ndarray, i: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        vd = v + i * rs
        exps = [np.exp(vd / s) for s in scales]
        f = iph - i0 * (sum(exps) - offset) - vd / rsh - i
        df = np.full(i.shape, -rs / rsh - 1) - sum((i0 * rs / s) * e for s, e in zip(scales, exps))
        return f, df

    return residual


def single_diode(voltage: np.ndarray,
                 op: OperatingPointParameters,
                 n: float,
                 ns: int,
                 settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Single-diode model solved by Newton-Raphson.

    I = Iph - I0 [exp((V + I Rs) / a) - 1] - (V + I Rs) / Rsh,  a = n Ns kT/q

    Args:
        voltage: Voltage samples (V)
        op: Operating-point parameters
        n: Diode ideality factor
        ns: Number of cells in series
        settings: Iteration limits and thresholds

    Returns:
        Current array (A), clamped at zero
    """
    voltage = np.asarray(voltage, dtype=float)
    a = n * ns * op.thermal_voltage

    initial = np.maximum(0, op.iph - voltage / op.rsh_op)
    residual = _multi_diode_residual(op.iph, op.i0, op.rs_op, op.rsh_op, (a,))

    current = _newton_raphson(voltage, initial, residual, settings)
    return np.maximum(0, current)


def multi_diode(voltage: np.ndarray,
                op: OperatingPointParameters,
                ns: int,
                multipliers: DiodeMultipliers,
                settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Multi-diode model solved by Newton-Raphson.

    All paths share the saturation current I0 and the scale Ns Vt, each
    divided by its own fixed multiplier A.

    Args:
        voltage: Voltage samples (V)
        op: Operating-point parameters
        ns: Number of cells in series
        multipliers: Fixed ideality multipliers, one per diode
        settings: Iteration limits and thresholds

    Returns:
        Current array (A), clamped at zero
    """
    voltage = np.asarray(voltage, dtype=float)
    ns_vt = ns * op.thermal_voltage
    scales = tuple(a * ns_vt for a in multipliers.values)

    initial = np.maximum(0, np.minimum(op.iph - voltage / op.rsh_op, op.iph))
    residual = _multi_diode_residual(op.iph, op.i0, op.rs_op, op.rsh_op, scales)

    current = _newton_raphson(voltage, initial, residual, settings)
    return np.maximum(0, current)


def double_diode(voltage: np.ndarray,
                 op: OperatingPointParameters,
                 ns: int,
                 settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Double-diode model, A1 = 1 (ideal) and A2 = 2 (space-charge)."""
    return multi_diode(voltage, op, ns, DDM_MULTIPLIERS, settings)


def triple_diode(voltage: np.ndarray,
                 op: OperatingPointParameters,
                 ns: int,
                 settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Triple-diode model, A1 = 1, A2 = 1.2, A3 = 2.5."""
    return multi_diode(voltage, op, ns, TDM_MULTIPLIERS, settings)


def lambert_w_explicit(voltage: np.ndarray,
                       op: OperatingPointParameters,
                       n: float,
                       ns: int,
                       settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Explicit single-diode solution with the Lambert W function.

    I = (Rsh (Iph + I0) - V) / (Rs + Rsh) - (a / Rs) W(x)
    x = (Rs I0 / a) Rsh/(Rs+Rsh) exp(((Rs (Iph + I0) + V) / a) Rsh/(Rs+Rsh))

    Below the Rs threshold the solution is ill-conditioned (division by Rs)
    and the single-diode Newton-Raphson solver is used instead.

    Args:
        voltage: Voltage samples (V)
        op: Operating-point parameters
        n: Diode ideality factor
        ns: Number of cells in series
        settings: Thresholds

    Returns:
        Current array (A), clamped at zero
    """
    if op.rs_op < settings.lambert_rs_threshold:
        logger.debug(
            "Rs = %.4g Ω below %.4g Ω; using single-diode Newton-Raphson",
            op.rs_op, settings.lambert_rs_threshold,
        )
        return single_diode(voltage, op, n, ns, settings)

    voltage = np.asarray(voltage, dtype=float)
    rs, rsh = op.rs_op, op.rsh_op
    a = n * ns * op.thermal_voltage

    rsh_eff = rsh / (rs + rsh)
    coef = ((rs * op.i0) / a) * rsh_eff
    exp_arg = ((rs * (op.iph + op.i0) + voltage) / a) * rsh_eff

    # Near and beyond Voc the exponent overflows; current is zero there
    overflow = exp_arg > settings.exp_overflow_limit
    arg = coef * np.exp(np.where(overflow, 0.0, exp_arg))

    w = np.where(
        arg < settings.lambert_linear_threshold,
        arg,
        lambert_w_barry_array(arg),
    )

    current = (rsh * (op.iph + op.i0) - voltage) / (rs + rsh) - (a / rs) * w
    current = np.where(overflow, 0.0, current)
    return np.maximum(0, current)


def solve_current(model: Union[ModelType, str],
                  voltage: np.ndarray,
                  op: OperatingPointParameters,
                  n: float,
                  ns: int,
                  settings: SolverSettings = SOLVER_SETTINGS) -> np.ndarray:
    """Dispatch the voltage sweep to the selected model.

    Raises:
        ValueError: For an unrecognized model
    """
    model = ModelType.parse(model)

    if model is ModelType.SDM:
        return single_diode(voltage, op, n, ns, settings)
    elif model is ModelType.DDM:
        return double_diode(voltage, op, ns, settings)
    elif model is ModelType.TDM:
        return triple_diode(voltage, op, ns, settings)
    elif model is ModelType.LAMBERT:
        return lambert_w_explicit(voltage, op, n, ns, settings)

    raise ValueError(f"Unsupported model: {model}")
