"""I-V Curve Assembly and Analysis.

Builds the voltage sweep of a simulation and extracts the figures of merit
from the resulting curve (Isc, Voc crossing, maximum power point, FF).
"""

from typing import Dict, Tuple

import numpy as np
from scipy.interpolate import interp1d


def build_voltage_grid(voc_op: float, num_points: int = 200, margin: float = 1.05) -> np.ndarray:
    """Evenly spaced sweep from 0 to margin * voc_op, both ends included.

    Args:
        voc_op: Operating open-circuit voltage estimate (V)
        num_points: Number of intervals; the grid holds num_points + 1 samples
        margin: Sweep extension beyond voc_op

    Returns:
        Voltage array, grid[i] = margin * voc_op * i / num_points
    """
    if num_points < 1:
        raise ValueError(f"num_points must be at least 1, got {num_points}")
    return (voc_op * margin * np.arange(num_points + 1)) / num_points


def find_mpp_index(power: np.ndarray) -> int:
    """Index of the maximum power sample.

    Linear scan with a strict comparison against a running maximum that
    starts at zero: the first occurrence wins on ties, and index 0 is
    returned when no sample has positive power.
    """
    max_index = 0
    max_power = 0.0
    for i, p in enumerate(power):
        if p > max_power:
            max_power = p
            max_index = i
    return max_index


class IVCurveAnalyzer:
    """Analyze a simulated I-V curve."""

    def __init__(self, voltage: np.ndarray, current: np.ndarray):
        """Initialize with I-V data.

        Args:
            voltage: Array of voltage values (V), ascending
            current: Array of current values (A)
        """
        self.voltage = np.asarray(voltage, dtype=float)
        self.current = np.asarray(current, dtype=float)

        if self.voltage.shape != self.current.shape:
            raise ValueError(
                f"Voltage and current lengths differ: "
                f"{self.voltage.size} != {self.current.size}"
            )

        # Results storage
        self.results = {}

    @property
    def power(self) -> np.ndarray:
        """Pointwise power P = V * I (W)."""
        return self.voltage * self.current

    def extract_parameters(self) -> Dict:
        """Extract all I-V curve parameters.

        Returns:
            Dictionary containing:
                - isc: Short-circuit current (A)
                - voc: Open-circuit voltage crossing (V)
                - pmax: Maximum power (W)
                - vmpp: Voltage at MPP (V)
                - impp: Current at MPP (A)
                - ff: Fill factor of the curve itself
        """
        self.results['isc'] = self.find_isc()
        self.results['voc'] = self.find_voc()

        vmpp, impp, pmax = self.find_mpp()
        self.results['vmpp'] = vmpp
        self.results['impp'] = impp
        self.results['pmax'] = pmax

        self.results['ff'] = self.fill_factor(self.results['voc'], self.results['isc'])

        return self.results

    def find_isc(self) -> float:
        """Current at V=0 (interpolated when the sweep does not start at 0)."""
        if self.voltage[0] == 0.0:
            return float(self.current[0])

        f = interp1d(self.voltage, self.current, kind='linear', fill_value='extrapolate')
        return float(f(0.0))

    def find_voc(self) -> float:
        """Voltage where the current reaches zero.

        Currents are clamped at zero, so the crossing is estimated by
        extrapolating the last two positive samples, bounded by the first
        zero sample. Returns the sweep end if the current never reaches zero.
        """
        zero_idx = np.flatnonzero(self.current <= 0)
        if zero_idx.size == 0:
            return float(self.voltage[-1])

        first = zero_idx[0]
        if first < 2:
            return float(self.voltage[first])

        segment = slice(first - 2, first)
        if self.current[first - 2] == self.current[first - 1]:
            return float(self.voltage[first])

        f = interp1d(self.current[segment], self.voltage[segment],
                     kind='linear', fill_value='extrapolate')
        return float(np.clip(f(0.0), self.voltage[first - 1], self.voltage[first]))

    def find_mpp(self) -> Tuple[float, float, float]:
        """Find maximum power point on the sampled curve.

        Returns:
            (vmpp, impp, pmax)
        """
        power = self.power
        idx_max = find_mpp_index(power)
        return (
            float(self.voltage[idx_max]),
            float(self.current[idx_max]),
            float(power[idx_max]),
        )

    def fill_factor(self, voc: float, isc: float) -> float:
        """FF = (Vmpp * Impp) / (Voc * Isc)."""
        vmpp, impp, _ = self.find_mpp()
        return (vmpp * impp) / (voc * isc)

    def summary(self) -> str:
        """Generate summary report."""
        if not self.results:
            self.extract_parameters()

        summary = f"""
I-V Curve Analysis Results
========================

Short-Circuit Current (Isc): {self.results['isc']:.3f} A
Open-Circuit Voltage (Voc):  {self.results['voc']:.3f} V

Maximum Power Point:
  Voltage (Vmpp):  {self.results['vmpp']:.3f} V
  Current (Impp):  {self.results['impp']:.3f} A
  Power (Pmax):    {self.results['pmax']:.3f} W

Fill Factor (FF):  {self.results['ff']:.4f}
"""
        return summary
