"""CSV export of simulated curves."""

from pathlib import Path

import pandas as pd

from config.config import EXPORT_CONFIG
from ..analysis.simulation import ModuleParameters, SimulationResult


def to_dataframe(result: SimulationResult) -> pd.DataFrame:
    """Curve as a DataFrame with the export column headers, full resolution."""
    voltage_col, current_col, power_col = EXPORT_CONFIG["columns"]
    return pd.DataFrame({
        voltage_col: result.voltage,
        current_col: result.current,
        power_col: result.power,
    })


def export_to_csv(result: SimulationResult,
                  params: ModuleParameters,
                  decimals: int = EXPORT_CONFIG["csv_decimals"]) -> str:
    """Render the curve as CSV text.

    A '#'-prefixed header block identifies the module, the model and the MPP,
    followed by a blank line, the column header and one fixed-point row per
    sample.
    """
    info = [
        f"# Módulo: {params.marca} - {params.referencia}",
        f"# Modelo: {result.model_name}",
        f"# Vmpp: {result.vmpp:.4f} V | Impp: {result.impp:.4f} A",
        f"# Pmax: {result.pmax_calc:.4f} W | FF: {result.fill_factor:.4f}",
        "",
    ]

    table = to_dataframe(result).to_csv(
        index=False,
        float_format=f"%.{decimals}f",
        lineterminator="\n",
    )

    return "\n".join(info) + "\n" + table.rstrip("\n")


def write_csv(result: SimulationResult, params: ModuleParameters, file_path: str) -> Path:
    """Write export_to_csv output to a file (UTF-8) and return its path."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_to_csv(result, params), encoding="utf-8")
    return path
