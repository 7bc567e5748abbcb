"""PV Module Preset Registry.

Datasheet definitions of commercial modules available as starting points
for a simulation. Fields are string-encoded exactly as they travel in the
module-definition interchange files (JSON/CSV/XLSX), and are parsed to
numbers only when converted to simulation parameters.

Included modules:
- Jinko JKM410M-72H-V (144 half-cells, 410 W)
- Jinko JKM470M-7RL3-V (144 half-cells, 470 W)
- BIG SUN BigRef-IV-02 (36 cells, 85 W)
- Trina TYN-85S5 (36 cells, 85 W)
"""

from typing import Dict, List, Any, Optional
from dataclasses import dataclass, asdict, fields


# Interchange keys in file order; Vm, Im and Beta_v are optional
PRESET_KEYS = (
    "Marca", "Referencia", "Isc", "Voc", "Gop", "Top", "Alpha_i",
    "Acelda", "Ns", "Np", "n", "Rs", "Rsh", "Pmax",
)
OPTIONAL_PRESET_KEYS = ("Vm", "Im", "Beta_v")


@dataclass(frozen=True)
class PresetModule:
    """Module definition in its string-encoded interchange form."""
    Marca: str
    Referencia: str
    Isc: str
    Voc: str
    Gop: str = "1000"
    Top: str = "25"
    Alpha_i: str = "0"
    Acelda: str = "0"
    Ns: str = "0"
    Np: str = "1"
    n: str = "1"
    Rs: str = "0"
    Rsh: str = "0"
    Pmax: str = "0"
    Vm: str = "0"
    Im: str = "0"
    Beta_v: str = "0"

    @property
    def key(self) -> str:
        """Registry key, 'Marca Referencia'."""
        return f"{self.Marca} {self.Referencia}".strip()

    def to_dict(self) -> Dict[str, str]:
        """Return the interchange mapping (all values as strings)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresetModule":
        """Build a preset from a mapping, stringifying every known field.

        Unknown keys are ignored; missing optional keys keep their default.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            values[key] = "" if value is None else str(value).strip()
        values.setdefault("Marca", "")
        values.setdefault("Referencia", "")
        values.setdefault("Isc", "")
        values.setdefault("Voc", "")
        return cls(**values)


# ============================================================================
# PRESET DATABASE
# ============================================================================

PRESET_DATABASE: Dict[str, PresetModule] = {
    "JKM410M-72H-V": PresetModule(
        Marca="Jinko",
        Referencia="JKM410M-72H-V",
        Isc="10.6",
        Voc="50.4",
        Gop="1000",
        Top="25",
        Alpha_i="0.048",
        Acelda="0.0126",
        Ns="144",
        Np="1",
        n="0.9273",
        Rs="0.004",
        Rsh="500",
        Pmax="410",
    ),
    "JKM470M-7RL3-V": PresetModule(
        Marca="Jinko",
        Referencia="JKM470M-7RL3-V",
        Isc="11.45",
        Voc="53.95",
        Gop="1000",
        Top="25",
        Alpha_i="0.048",
        Acelda="0.0126",
        Ns="144",
        Np="1",
        n="0.92",
        Rs="0.0035",
        Rsh="550",
        Pmax="470",
    ),
    "BigRef-IV-02": PresetModule(
        Marca="BIG SUN",
        Referencia="BigRef-IV-02",
        Isc="5.75",
        Voc="22.39",
        Gop="1000",
        Top="25",
        Alpha_i="0.05",
        Acelda="0.0243",
        Ns="36",
        Np="1",
        n="1.2",
        Rs="0.01",
        Rsh="200",
        Pmax="85",
    ),
    "TYN-85S5": PresetModule(
        Marca="Trina",
        Referencia="TYN-85S5",
        Isc="5.02",
        Voc="22.1",
        Gop="1000",
        Top="25",
        Alpha_i="0.05",
        Acelda="0.0243",
        Ns="36",
        Np="1",
        n="1.15",
        Rs="0.015",
        Rsh="180",
        Pmax="85",
    ),
}

DEFAULT_PRESET = PRESET_DATABASE["JKM410M-72H-V"]


def get_preset(referencia: str) -> Optional[PresetModule]:
    """Look up a preset by its reference (case-insensitive).

    Args:
        referencia: Module reference, e.g. "JKM410M-72H-V"

    Returns:
        PresetModule or None if not registered
    """
    if referencia in PRESET_DATABASE:
        return PRESET_DATABASE[referencia]

    wanted = referencia.strip().lower()
    for key, preset in PRESET_DATABASE.items():
        if key.lower() == wanted:
            return preset
    return None


def list_all_presets() -> List[str]:
    """List all registered module references."""
    return list(PRESET_DATABASE.keys())


def list_all_manufacturers() -> List[str]:
    """List unique manufacturers, in registry order."""
    manufacturers = []
    for preset in PRESET_DATABASE.values():
        if preset.Marca not in manufacturers:
            manufacturers.append(preset.Marca)
    return manufacturers


def get_presets_by_manufacturer(marca: str) -> List[PresetModule]:
    """Get all presets of one manufacturer (case-insensitive)."""
    return [
        preset for preset in PRESET_DATABASE.values()
        if preset.Marca.lower() == marca.lower()
    ]
