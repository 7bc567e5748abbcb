"""Chart-ready views of a simulation result."""

from typing import Dict, List, Tuple

import numpy as np

from config.config import EXPORT_CONFIG
from ..analysis.iv_curve import IVCurveAnalyzer
from ..analysis.simulation import ModuleParameters, SimulationResult


def to_chart_data(result: SimulationResult, decimals: int = EXPORT_CONFIG["chart_decimals"]) -> List[Dict[str, float]]:
    """One {'voltage', 'current', 'power'} record per curve sample, rounded."""
    return [
        {
            'voltage': round(sample.voltage, decimals),
            'current': round(sample.current, decimals),
            'power': round(sample.power, decimals),
        }
        for sample in result.samples()
    ]


def decimate(result: SimulationResult, step: int = 4) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Every step-th sample of the curve, always keeping the last one.

    Used for vector plots in reports where the full resolution is not needed.
    """
    if step < 1:
        raise ValueError(f"step must be at least 1, got {step}")

    idx = np.arange(0, len(result), step)
    if idx[-1] != len(result) - 1:
        idx = np.append(idx, len(result) - 1)

    return result.voltage[idx], result.current[idx], result.power[idx]


def annotation_points(result: SimulationResult, params: ModuleParameters) -> Dict[str, Tuple[float, float]]:
    """Marker positions (V, I) for the chart.

    Datasheet Isc at V=0 and Voc at I=0, the MPP, and the zero-current
    crossing of the simulated curve itself.
    """
    analyzer = IVCurveAnalyzer(result.voltage, result.current)
    return {
        'isc': (0.0, params.isc),
        'voc': (params.voc, 0.0),
        'mpp': (result.vmpp, result.impp),
        'voc_curve': (analyzer.find_voc(), 0.0),
    }


def axis_limits(result: SimulationResult, params: ModuleParameters, headroom: float = 1.1) -> Dict[str, Tuple[float, float]]:
    """Axis ranges covering the sweep, Isc and the maximum power."""
    return {
        'voltage': (0.0, float(result.voltage[-1])),
        'current': (0.0, max(params.isc, float(result.current.max())) * headroom),
        'power': (0.0, result.pmax_calc * headroom),
    }
