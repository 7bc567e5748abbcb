"""Auto-detect the format of a module-definition file."""

import logging
from pathlib import Path
from typing import List, Tuple, Dict, Any

from config.config import INGESTION_CONFIG
from config.module_presets import PresetModule
from .base_loader import BaseLoader
from .json_loader import JsonLoader
from .csv_loader import CsvLoader
from .xlsx_loader import XlsxLoader

logger = logging.getLogger(__name__)


class AutoDetector:
    """Pick the loader from the file extension and load definitions.

    Only extensions listed in INGESTION_CONFIG["allowed_extensions"] are
    accepted.
    """

    LOADERS = {
        '.json': JsonLoader,
        '.csv': CsvLoader,
        '.xlsx': XlsxLoader,
        '.xls': XlsxLoader,
    }

    @classmethod
    def get_loader(cls, file_path: str) -> BaseLoader:
        """Instantiate the loader for a file.

        Raises:
            ValueError: For an unsupported extension
        """
        ext = Path(file_path).suffix.lower()
        if ext not in INGESTION_CONFIG["allowed_extensions"] or ext not in cls.LOADERS:
            raise ValueError(f"Unsupported file extension: {ext}")
        return cls.LOADERS[ext](str(file_path))

    @classmethod
    def load_file(cls, file_path: str) -> List[PresetModule]:
        """Auto-detect format and load file.

        Args:
            file_path: Path to module-definition file

        Returns:
            List of PresetModule
        """
        loader = cls.get_loader(file_path)
        data = loader.load()

        if not loader.validate():
            raise ValueError(f"Data validation failed for {file_path}")

        return data

    @classmethod
    def batch_load(cls, file_paths: list) -> Tuple[List[PresetModule], List[Dict[str, Any]]]:
        """Load multiple files.

        Args:
            file_paths: List of file paths

        Returns:
            (modules, errors) where errors lists {'file', 'error'} per failure
        """
        results = []
        errors = []

        for file_path in file_paths:
            try:
                results.extend(cls.load_file(file_path))
            except (OSError, ValueError) as e:
                logger.warning("Could not load %s: %s", file_path, e)
                errors.append({'file': str(file_path), 'error': str(e)})

        return results, errors
