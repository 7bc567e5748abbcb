"""Loader for CSV module definitions (.csv)."""

import pandas as pd
from typing import List

from config.config import INGESTION_CONFIG
from config.module_presets import PresetModule
from .base_loader import BaseLoader


class CsvLoader(BaseLoader):
    """Load a module table, one module per row, header = interchange keys."""

    def load(self) -> List[PresetModule]:
        """Load data from CSV file."""
        delimiter = self.detect_delimiter()
        df = pd.read_csv(
            self.file_path,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            encoding=INGESTION_CONFIG["csv_encoding"],
        )

        if 'Referencia' not in [str(col).strip() for col in df.columns]:
            raise ValueError(f"Could not find 'Referencia' column in {self.file_path}")

        self.data = self.records_from_dataframe(df)
        return self.data

    def detect_delimiter(self) -> str:
        """Detect delimiter from the header line."""
        with open(self.file_path, 'r', encoding=INGESTION_CONFIG["csv_encoding"]) as f:
            first_line = f.readline()

        delimiters = [',', ';', '\t', '|']
        delimiter_counts = {d: first_line.count(d) for d in delimiters}

        # Return delimiter with highest count
        return max(delimiter_counts, key=delimiter_counts.get)
