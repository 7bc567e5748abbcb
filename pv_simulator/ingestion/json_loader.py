"""Loader for JSON module definitions (.json)."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from config.module_presets import PresetModule
from .base_loader import BaseLoader


class JsonLoader(BaseLoader):
    """Load module definitions saved by the simulator or written by hand.

    Accepts a list of module objects, a single module object, or an object
    with a "modulos" list.
    """

    def load(self) -> List[PresetModule]:
        """Load data from JSON file."""
        with open(self.file_path, 'r', encoding='utf-8') as f:
            content = json.load(f)

        if isinstance(content, dict) and isinstance(content.get('modulos'), list):
            self.metadata = {k: v for k, v in content.items() if k != 'modulos'}
            content = content['modulos']
        elif isinstance(content, dict):
            content = [content]

        if not isinstance(content, list) or not all(isinstance(item, dict) for item in content):
            raise ValueError(f"Unexpected JSON structure in {self.file_path}")

        self.data = [PresetModule.from_dict(item) for item in content]
        return self.data


def dump_presets_json(presets: Iterable[PresetModule], file_path: str) -> Path:
    """Write module definitions as a JSON list with string-encoded fields.

    Args:
        presets: Definitions to write
        file_path: Destination path (parent directories are created)

    Returns:
        Path of the written file
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload: List[Dict[str, Any]] = [preset.to_dict() for preset in presets]
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    return path
