"""Excel export of simulated curves and figures of merit."""

from pathlib import Path

import pandas as pd

from config.config import EXPORT_CONFIG
from ..analysis.simulation import ModuleParameters, SimulationResult
from .csv_export import to_dataframe
from .summary import summary_table


def export_to_excel(result: SimulationResult, params: ModuleParameters, file_path: str) -> Path:
    """Write a workbook with the curve sheet and the summary sheet.

    Args:
        result: Simulation result
        params: Parameters the result was computed from
        file_path: Destination .xlsx path

    Returns:
        Path of the written workbook
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    decimals = EXPORT_CONFIG["csv_decimals"]
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        to_dataframe(result).round(decimals).to_excel(
            writer, sheet_name=EXPORT_CONFIG["data_sheet"], index=False
        )
        summary_table(result, params).to_excel(
            writer, sheet_name=EXPORT_CONFIG["summary_sheet"], index=False
        )

    return path
