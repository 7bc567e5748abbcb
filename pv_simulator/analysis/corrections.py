"""Thermal and Irradiance Parameter Corrections.

Translate datasheet ratings at Standard Test Conditions (STC):
- Temperature: 25°C
- Irradiance: 1000 W/m²

to the equivalent-circuit parameters at the operating point
(photogenerated current, saturation current, series and shunt resistance).
Reference: Abbassi, A., et al. (2017). IEEE Xplore.
"""

from dataclasses import dataclass

import numpy as np

from config.pv_constants import PHYSICS, STC, STCConditions


@dataclass(frozen=True)
class OperatingPointParameters:
    """Equivalent-circuit parameters at the operating condition."""
    iph: float  # Photogenerated current (A)
    i0: float  # Saturation current (A)
    rs_op: float  # Series resistance (Ω)
    rsh_op: float  # Shunt resistance (Ω)
    temperature_k: float  # Operating cell temperature (K)

    @property
    def thermal_voltage(self) -> float:
        """kT/q at the operating temperature (V)."""
        return PHYSICS.thermal_voltage(self.temperature_k)


class ThermalCorrector:
    """Map STC ratings and circuit parameters to an operating point.

    Uses the bandgap-temperature law for the saturation current and an
    irradiance-proportional photocurrent with a linear temperature term.
    """

    def __init__(self, stc: STCConditions = STC):
        self.stc = stc

    def reference_saturation_current(self, isc: float, voc: float, n: float, ns: int) -> float:
        """Saturation current at STC, Io_ref = Isc / (exp(Voc / (n Ns Vt)) - 1).

        An exponent beyond the float range gives Io_ref = 0.
        """
        if voc <= 0:
            raise ValueError(f"Voc must be positive, got {voc}")
        a_stc = n * ns * PHYSICS.thermal_voltage(PHYSICS.to_kelvin(self.stc.temperature))
        with np.errstate(over="ignore"):
            return float(isc / (np.exp(voc / a_stc) - 1))

    def reference_photocurrent(self,
                               isc: float,
                               io_ref: float,
                               rs: float,
                               rsh: float,
                               n: float,
                               ns: int) -> float:
        """Photogenerated current at STC corrected for Rs and Rsh."""
        a_stc = n * ns * PHYSICS.thermal_voltage(PHYSICS.to_kelvin(self.stc.temperature))
        iph_ref = isc * (1 + rs / rsh)
        if io_ref > 0:
            with np.errstate(over="ignore"):
                iph_ref += io_ref * (np.exp((rs * isc) / a_stc) - 1)
        return float(iph_ref)

    def correct(self,
                isc: float,
                voc: float,
                rs: float,
                rsh: float,
                n: float,
                ns: int,
                irradiance: float,
                temperature: float,
                alpha: float) -> OperatingPointParameters:
        """Compute the operating-point parameters.

        Args:
            isc: Short-circuit current at STC (A)
            voc: Open-circuit voltage at STC (V)
            rs: Series resistance at STC (Ω)
            rsh: Shunt resistance at STC (Ω)
            n: Diode ideality factor
            ns: Number of cells in series
            irradiance: Operating irradiance (W/m²)
            temperature: Operating cell temperature (°C)
            alpha: Temperature coefficient of Isc as a fraction per °C
                (datasheet %/°C divided by 100)

        Returns:
            OperatingPointParameters
        """
        if rsh <= 0:
            raise ValueError(f"Rsh must be positive, got {rsh}")
        if irradiance <= 0:
            raise ValueError(f"Operating irradiance must be positive, got {irradiance}")

        t_op = PHYSICS.to_kelvin(temperature)
        t_stc = PHYSICS.to_kelvin(self.stc.temperature)

        io_ref = self.reference_saturation_current(isc, voc, n, ns)
        iph_ref = self.reference_photocurrent(isc, io_ref, rs, rsh, n, ns)

        g_ratio = irradiance / self.stc.irradiance
        iph = g_ratio * (iph_ref + alpha * isc * (temperature - self.stc.temperature))

        with np.errstate(over="ignore", invalid="ignore"):
            i0 = float(io_ref
                       * (t_op / t_stc) ** 3
                       * np.exp(((PHYSICS.eg * PHYSICS.q) / (n * PHYSICS.k)) * (1 / t_stc - 1 / t_op)))

        rsh_op = rsh * (self.stc.irradiance / irradiance)

        return OperatingPointParameters(
            iph=iph,
            i0=i0,
            rs_op=rs,
            rsh_op=rsh_op,
            temperature_k=t_op,
        )


def calculate_operating_parameters(isc: float,
                                   voc: float,
                                   rs: float,
                                   rsh: float,
                                   n: float,
                                   ns: int,
                                   irradiance: float,
                                   temperature: float,
                                   alpha_percent: float) -> OperatingPointParameters:
    """Operating-point parameters with the datasheet Isc coefficient in %/°C."""
    return ThermalCorrector().correct(
        isc, voc, rs, rsh, n, ns, irradiance, temperature, alpha_percent / 100
    )


def estimate_operating_voc(voc: float, beta_v: float, temperature: float,
                           stc: STCConditions = STC) -> float:
    """Temperature-corrected open-circuit voltage estimate, Voc + beta (T - 25)."""
    return voc + beta_v * (temperature - stc.temperature)
