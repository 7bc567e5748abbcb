"""Physical Constants and Solver Settings.

Fixed values shared by the thermal corrector and the diode-model solvers:
- Elementary charge and Boltzmann constant (CODATA 2018, exact)
- Silicon bandgap energy
- Standard Test Conditions (STC)
- Newton-Raphson and Lambert W numerical thresholds
- Recombination multipliers of the double- and triple-diode models
- Barry et al. (2000) Lambert W approximation coefficients
"""

import math
from typing import Tuple
from dataclasses import dataclass


# ============================================================================
# PHYSICAL CONSTANTS
# ============================================================================

@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants used by the equivalent-circuit models."""
    q: float = 1.602176634e-19  # Elementary charge (C)
    k: float = 1.380649e-23  # Boltzmann constant (J/K)
    eg: float = 1.12  # Silicon bandgap (eV)
    kelvin_offset: float = 273.15

    def to_kelvin(self, temperature_c: float) -> float:
        """Convert a temperature from °C to K."""
        return temperature_c + self.kelvin_offset

    def thermal_voltage(self, temperature_k: float) -> float:
        """Thermal voltage kT/q (V) at the given absolute temperature."""
        return self.k * temperature_k / self.q


@dataclass(frozen=True)
class STCConditions:
    """Standard Test Conditions, the reference state of datasheet ratings."""
    irradiance: float = 1000.0  # W/m²
    temperature: float = 25.0  # °C


# ============================================================================
# SOLVER SETTINGS
# ============================================================================

@dataclass(frozen=True)
class SolverSettings:
    """Numerical thresholds of the diode-model solvers.

    Newton-Raphson iterations stop after ``max_iterations`` steps, when the
    update falls below ``tolerance`` or when the derivative magnitude drops
    below ``derivative_floor``. The Lambert W path delegates to the
    single-diode solver below ``lambert_rs_threshold``, returns zero current
    when the exponent exceeds ``exp_overflow_limit`` and uses W(x) ~ x below
    ``lambert_linear_threshold``.
    """
    max_iterations: int = 100
    tolerance: float = 1e-9
    derivative_floor: float = 1e-15
    lambert_rs_threshold: float = 0.01  # Ω
    exp_overflow_limit: float = 700.0
    lambert_linear_threshold: float = 1e-10

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if self.tolerance <= 0 or self.derivative_floor <= 0:
            raise ValueError("tolerance and derivative_floor must be positive")


@dataclass(frozen=True)
class DiodeMultipliers:
    """Fixed ideality multipliers of a multi-diode model.

    Each recombination path uses exp(Vd / (A * Ns * Vt)).
    """
    values: Tuple[float, ...]
    reference: str = ""

    def __post_init__(self):
        if not self.values or any(a <= 0 for a in self.values):
            raise ValueError(f"Diode multipliers must be positive: {self.values}")


# Ishaque simplification: ideal (A1) and space-charge (A2) recombination
DDM_MULTIPLIERS = DiodeMultipliers(
    values=(1.0, 2.0),
    reference="Ishaque et al. simplification",
)

# Olayiwola et al. (2024), Sustainability
TDM_MULTIPLIERS = DiodeMultipliers(
    values=(1.0, 1.2, 2.5),
    reference="Olayiwola et al. (2024)",
)


# ============================================================================
# LAMBERT W (BARRY ET AL. 2000)
# ============================================================================

@dataclass(frozen=True)
class BarryCoefficients:
    """Coefficients of the Barry et al. (2000) analytical approximation."""
    epsilon: float = 0.4586887
    log_floor: float = 1e-300
    n2: float = 3 * math.sqrt(2) + 6

    @property
    def n1(self) -> float:
        """N1 = (1 - 1/sqrt(2)) * (N2 + sqrt(2))."""
        return (1 - 1 / math.sqrt(2)) * (self.n2 + math.sqrt(2))

    @property
    def branch_point(self) -> float:
        """Lower end of the real domain of W0, -1/e."""
        return -1 / math.e


PHYSICS = PhysicalConstants()
STC = STCConditions()
SOLVER_SETTINGS = SolverSettings()
BARRY = BarryCoefficients()
