"""Text and tabular summaries of a simulation."""

import math
from typing import List, Tuple

import pandas as pd

from config.config import SIMULATION_CONFIG
from ..analysis.simulation import ModuleParameters, SimulationResult


def is_error_acceptable(result: SimulationResult,
                        threshold: float = SIMULATION_CONFIG["acceptable_error_percent"]) -> bool:
    """Deviation from the datasheet power below the threshold (%)."""
    return result.is_error_acceptable(threshold)


def _summary_rows(result: SimulationResult, params: ModuleParameters) -> List[Tuple[str, float, str]]:
    return [
        ("Isc", params.isc, "A"),
        ("Voc", params.voc, "V"),
        ("Gop", params.gop, "W/m²"),
        ("Top", params.top, "°C"),
        ("Ns", params.ns, ""),
        ("Np", params.np, ""),
        ("n", params.n, ""),
        ("Rs", params.rs, "Ω"),
        ("Rsh", params.rsh, "Ω"),
        ("Vmpp", result.vmpp, "V"),
        ("Impp", result.impp, "A"),
        ("Pmax calculada", result.pmax_calc, "W"),
        ("Pmax fabricante", params.reference_power, "W"),
        ("Factor de forma", result.fill_factor, ""),
        ("Eficiencia", result.efficiency, "%"),
        ("Error", result.error_percent, "%"),
        ("Iph", result.iph, "A"),
        ("I0", result.i0, "A"),
        ("Jsc", result.jsc, "mA/cm²"),
        ("Área total", result.atotal, "m²"),
    ]


def summary_table(result: SimulationResult, params: ModuleParameters) -> pd.DataFrame:
    """Parameters used and figures of merit as a three-column table."""
    rows = [("Módulo", f"{params.marca} {params.referencia}".strip(), ""),
            ("Modelo", result.model_name, "")]
    rows.extend(_summary_rows(result, params))
    return pd.DataFrame(rows, columns=["Parámetro", "Valor", "Unidad"])


def _fmt(value: float, spec: str) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "n/d"
    return format(value, spec)


def generate_summary(result: SimulationResult, params: ModuleParameters) -> str:
    """Generate summary report."""
    status = "aceptable" if is_error_acceptable(result) else "fuera de tolerancia"

    return f"""
Simulación I-V: {params.marca} {params.referencia}
========================
Modelo: {result.model_name}

Condiciones de operación:
  Irradiancia (Gop):  {params.gop:.1f} W/m²
  Temperatura (Top):  {params.top:.1f} °C

Punto de máxima potencia:
  Voltaje (Vmpp):  {result.vmpp:.2f} V
  Corriente (Impp):  {result.impp:.2f} A
  Potencia (Pmax):  {result.pmax_calc:.1f} W

Factor de forma (FF):  {result.fill_factor:.3f}
Eficiencia:  {_fmt(result.efficiency, '.2f')} %
Error vs. fabricante:  {_fmt(result.error_percent, '.2f')} % ({status})

Parámetros del circuito equivalente:
  Iph:  {result.iph:.4f} A
  I0:   {result.i0:.2e} A
  Jsc:  {_fmt(result.jsc, '.2f')} mA/cm²
  Área total:  {result.atotal:.4f} m²
"""
