"""Loader for Excel module definitions (.xlsx, .xls)."""

import pandas as pd
from typing import List, Optional

from config.module_presets import PresetModule
from .base_loader import BaseLoader


class XlsxLoader(BaseLoader):
    """Load a module table from a spreadsheet."""

    def __init__(self, file_path: str, sheet_name: Optional[str] = None):
        super().__init__(file_path)
        self.sheet_name = sheet_name

    def load(self) -> List[PresetModule]:
        """Load data from Excel file."""
        if self.sheet_name:
            df = pd.read_excel(self.file_path, sheet_name=self.sheet_name, dtype=str)
        else:
            # First sheet
            df = pd.read_excel(self.file_path, dtype=str)

        if 'Referencia' not in [str(col).strip() for col in df.columns]:
            raise ValueError(f"Could not find 'Referencia' column in {self.file_path}")

        self.metadata['sheet_name'] = self.sheet_name
        self.data = self.records_from_dataframe(df)
        return self.data
