"""Configuration file for the PV Module I-V Simulator.

Environment variables and simulation, ingestion and export settings.
"""

import os
from typing import Dict, Any

# ============================================================================
# APPLICATION SETTINGS
# ============================================================================
APP_CONFIG: Dict[str, Any] = {
    "app_name": "PV Module I-V Simulator",
    "version": "1.0.0",
    "debug": os.getenv("DEBUG", "False").lower() == "true",
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "log_json": os.getenv("LOG_JSON", "False").lower() == "true",
}

# ============================================================================
# SIMULATION SETTINGS
# ============================================================================
SIMULATION_CONFIG: Dict[str, Any] = {
    "num_points": 200,  # Grid intervals; the curve has num_points + 1 samples
    "voltage_margin": 1.05,  # Sweep up to 105% of the operating Voc estimate
    "default_model": "lambert",
    "acceptable_error_percent": 5.0,
}

# ============================================================================
# EXPORT SETTINGS
# ============================================================================
EXPORT_CONFIG: Dict[str, Any] = {
    "csv_decimals": 6,
    "chart_decimals": 4,
    "columns": ["Voltaje (V)", "Corriente (A)", "Potencia (W)"],
    "data_sheet": "Curva I-V",
    "summary_sheet": "Resumen",
}

# ============================================================================
# INGESTION SETTINGS
# ============================================================================
INGESTION_CONFIG: Dict[str, Any] = {
    "allowed_extensions": [".json", ".csv", ".xlsx", ".xls"],
    "csv_encoding": "utf-8-sig",  # Strips a leading BOM
}
