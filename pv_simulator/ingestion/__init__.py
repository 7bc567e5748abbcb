"""Module-Definition Ingestion.

Reads and writes PV module definitions in their string-encoded
interchange form and converts them to simulation parameters.

File Formats:
- JSON (list of modules, single module, or {"modulos": [...]})
- CSV (comma/semicolon/tab separated, one module per row)
- XLSX/XLS (Excel, one module per row)

Numeric fields that are missing or non-numeric resolve to 0.
"""

from .base_loader import (
    BaseLoader,
    parse_numeric,
    parse_integer,
    preset_to_params,
    params_to_preset,
)
from .auto_detector import AutoDetector
from .json_loader import JsonLoader, dump_presets_json
from .csv_loader import CsvLoader
from .xlsx_loader import XlsxLoader

__all__ = [
    "BaseLoader",
    "parse_numeric",
    "parse_integer",
    "preset_to_params",
    "params_to_preset",
    "AutoDetector",
    "JsonLoader",
    "dump_presets_json",
    "CsvLoader",
    "XlsxLoader",
]
