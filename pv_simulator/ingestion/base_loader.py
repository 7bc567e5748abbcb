"""Base loader class for module-definition files."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
import pandas as pd
import numpy as np

from config.module_presets import PresetModule
from ..analysis.diode_models import ModelType
from ..analysis.simulation import ModuleParameters


def parse_numeric(value: Any) -> float:
    """Parse a string-encoded number; missing or non-numeric values give 0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    number = pd.to_numeric(pd.Series([value], dtype=object), errors='coerce').iloc[0]
    if pd.isna(number) or not np.isfinite(number):
        return 0.0
    return float(number)


def parse_integer(value: Any) -> int:
    """Parse a string-encoded count, truncating decimals; invalid gives 0."""
    return int(parse_numeric(value))


def preset_to_params(preset: PresetModule,
                     modelo: Union[ModelType, str] = ModelType.LAMBERT) -> ModuleParameters:
    """Convert an interchange definition into simulation parameters.

    Args:
        preset: String-encoded module definition
        modelo: Model to simulate with

    Returns:
        ModuleParameters (not validated; simulate() validates)
    """
    return ModuleParameters(
        marca=preset.Marca,
        referencia=preset.Referencia,
        isc=parse_numeric(preset.Isc),
        voc=parse_numeric(preset.Voc),
        vm=parse_numeric(preset.Vm),
        im=parse_numeric(preset.Im),
        gop=parse_numeric(preset.Gop),
        top=parse_numeric(preset.Top),
        alpha_i=parse_numeric(preset.Alpha_i),
        beta_v=parse_numeric(preset.Beta_v),
        acelda=parse_numeric(preset.Acelda),
        ns=parse_integer(preset.Ns),
        np=parse_integer(preset.Np),
        n=parse_numeric(preset.n),
        rs=parse_numeric(preset.Rs),
        rsh=parse_numeric(preset.Rsh),
        pmax=parse_numeric(preset.Pmax),
        modelo=modelo,
    )


def params_to_preset(params: ModuleParameters) -> PresetModule:
    """Convert simulation parameters back to the interchange form."""
    return PresetModule(
        Marca=params.marca,
        Referencia=params.referencia,
        Isc=repr(float(params.isc)),
        Voc=repr(float(params.voc)),
        Gop=repr(float(params.gop)),
        Top=repr(float(params.top)),
        Alpha_i=repr(float(params.alpha_i)),
        Acelda=repr(float(params.acelda)),
        Ns=str(int(params.ns)),
        Np=str(int(params.np)),
        n=repr(float(params.n)),
        Rs=repr(float(params.rs)),
        Rsh=repr(float(params.rsh)),
        Pmax=repr(float(params.pmax)),
        Vm=repr(float(params.vm)),
        Im=repr(float(params.im)),
        Beta_v=repr(float(params.beta_v)),
    )


class BaseLoader(ABC):
    """Abstract base class for module-definition loaders."""

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)
        self.data: Optional[List[PresetModule]] = None
        self.metadata: Dict[str, Any] = {}

        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

    @abstractmethod
    def load(self) -> List[PresetModule]:
        """Load module definitions from file.

        Returns:
            List of PresetModule, one per module in the file
        """
        pass

    def validate(self) -> bool:
        """Validate loaded data: at least one module, each with a reference."""
        if not self.data:
            return False
        return all(preset.Referencia for preset in self.data)

    def get_file_extension(self) -> str:
        """Get file extension."""
        return self.file_path.suffix.lower()

    def to_params(self, modelo: Union[ModelType, str] = ModelType.LAMBERT) -> List[ModuleParameters]:
        """Convert the loaded definitions to simulation parameters."""
        if self.data is None:
            self.load()
        return [preset_to_params(preset, modelo) for preset in self.data]

    @staticmethod
    def records_from_dataframe(df: pd.DataFrame) -> List[PresetModule]:
        """One PresetModule per row; NaN cells become empty strings."""
        df = df.dropna(how='all')
        df.columns = [str(col).strip() for col in df.columns]
        records = df.astype(object).where(pd.notna(df), None).to_dict(orient='records')
        return [PresetModule.from_dict(record) for record in records]
