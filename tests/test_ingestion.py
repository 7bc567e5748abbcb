"""Tests for module-definition ingestion and the preset registry."""

import json
import math

import pandas as pd
import pytest

from config.config import INGESTION_CONFIG
from config.module_presets import (
    DEFAULT_PRESET,
    PresetModule,
    get_preset,
    get_presets_by_manufacturer,
    list_all_manufacturers,
    list_all_presets,
)
from pv_simulator import InvalidInputError, ModelType, simulate
from pv_simulator.ingestion import (
    AutoDetector,
    CsvLoader,
    JsonLoader,
    XlsxLoader,
    dump_presets_json,
    parse_integer,
    parse_numeric,
    params_to_preset,
    preset_to_params,
)


class TestParsing:
    @pytest.mark.parametrize("raw, expected", [
        ("10.6", 10.6),
        (" 3 ", 3.0),
        ("1e-3", 0.001),
        ("-0.14", -0.14),
        (5, 5.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("inf", 0.0),
        (math.nan, 0.0),
    ])
    def test_parse_numeric(self, raw, expected):
        assert parse_numeric(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw, expected", [("144", 144), ("2.7", 2), ("x", 0), ("", 0)])
    def test_parse_integer(self, raw, expected):
        assert parse_integer(raw) == expected


class TestConversion:
    def test_preset_to_params(self, default_preset):
        params = preset_to_params(default_preset)
        assert params.referencia == "JKM410M-72H-V"
        assert params.marca == "Jinko"
        assert params.isc == 10.6
        assert params.ns == 144
        assert params.n == 0.9273
        assert params.pmax == 410.0
        assert params.modelo is ModelType.LAMBERT

    def test_model_selection(self, default_preset):
        assert preset_to_params(default_preset, "tdm").modelo is ModelType.TDM

    def test_garbage_numbers_fail_validation(self):
        preset = PresetModule(Marca="", Referencia="X", Isc="abc", Voc="")
        params = preset_to_params(preset)
        assert params.isc == 0.0
        assert params.voc == 0.0
        with pytest.raises(InvalidInputError):
            simulate(params)

    def test_params_round_trip(self, jinko_params):
        preset = params_to_preset(jinko_params)
        assert preset.Ns == "144"
        assert preset_to_params(preset, jinko_params.modelo) == jinko_params

    def test_all_presets_simulate(self, all_presets):
        for preset in all_presets:
            result = simulate(preset_to_params(preset))
            assert result.pmax_calc > 0


class TestPresetRegistry:
    def test_lookup(self):
        assert get_preset("JKM410M-72H-V") is DEFAULT_PRESET
        assert get_preset("jkm410m-72h-v") is DEFAULT_PRESET
        assert get_preset("unknown") is None

    def test_listing(self):
        assert list_all_presets() == ["JKM410M-72H-V", "JKM470M-7RL3-V", "BigRef-IV-02", "TYN-85S5"]
        assert list_all_manufacturers() == ["Jinko", "BIG SUN", "Trina"]
        assert len(get_presets_by_manufacturer("jinko")) == 2

    def test_key(self):
        assert DEFAULT_PRESET.key == "Jinko JKM410M-72H-V"

    def test_from_dict(self):
        preset = PresetModule.from_dict({
            "Referencia": " R1 ", "Isc": 5.1, "Voc": None, "Extra": "ignored",
        })
        assert preset.Referencia == "R1"
        assert preset.Isc == "5.1"
        assert preset.Voc == ""
        assert preset.Marca == ""
        assert preset.Np == "1"


class TestJsonLoader:
    def test_round_trip(self, tmp_path, all_presets):
        path = dump_presets_json(all_presets, tmp_path / "out" / "modules.json")
        loaded = JsonLoader(str(path)).load()
        assert loaded == all_presets

    def test_dump_keeps_strings(self, tmp_path, default_preset):
        path = dump_presets_json([default_preset], tmp_path / "m.json")
        content = json.loads(path.read_text(encoding="utf-8"))
        assert content[0]["Isc"] == "10.6"

    def test_single_object(self, tmp_path, default_preset):
        path = tmp_path / "one.json"
        path.write_text(json.dumps(default_preset.to_dict()), encoding="utf-8")
        assert JsonLoader(str(path)).load() == [default_preset]

    def test_wrapped_list(self, tmp_path, default_preset):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"version": "1", "modulos": [default_preset.to_dict()]}), encoding="utf-8")
        loader = JsonLoader(str(path))
        assert loader.load() == [default_preset]
        assert loader.metadata == {"version": "1"}

    def test_unexpected_structure(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ValueError, match="Unexpected JSON structure"):
            JsonLoader(str(path)).load()

    def test_to_params(self, tmp_path, all_presets):
        path = dump_presets_json(all_presets, tmp_path / "modules.json")
        params = JsonLoader(str(path)).to_params("sdm")
        assert [p.referencia for p in params] == list_all_presets()
        assert all(p.modelo is ModelType.SDM for p in params)


class TestCsvLoader:
    def test_semicolon_table(self, tmp_path):
        path = tmp_path / "modules.csv"
        path.write_text(
            "Marca;Referencia;Isc;Voc;Ns;n;Rs;Rsh;Pmax\n"
            "Trina;TYN-85S5;5.02;22.1;36;1.15;0.015;180;85\n",
            encoding="utf-8",
        )
        loader = CsvLoader(str(path))
        assert loader.detect_delimiter() == ";"
        presets = loader.load()
        assert presets[0].Referencia == "TYN-85S5"
        assert presets[0].Gop == "1000"
        params = loader.to_params()[0]
        assert params.ns == 36
        assert params.rsh == 180.0

    def test_empty_cells(self, tmp_path):
        path = tmp_path / "modules.csv"
        path.write_text("Referencia,Isc,Voc,Pmax\nR1,5,20,\n", encoding="utf-8")
        preset = CsvLoader(str(path)).load()[0]
        assert preset.Pmax == ""
        assert preset_to_params(preset).pmax == 0.0

    def test_missing_reference_column(self, tmp_path):
        path = tmp_path / "modules.csv"
        path.write_text("Isc,Voc\n5,20\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Referencia"):
            CsvLoader(str(path)).load()

    def test_byte_order_mark(self, tmp_path):
        path = tmp_path / "excel.csv"
        path.write_text(
            "Marca;Referencia;Isc;Voc\nJinko;JKM410M-72H-V;10.6;50.4\n",
            encoding="utf-8-sig",
        )
        loader = CsvLoader(str(path))
        assert loader.detect_delimiter() == ";"
        preset = loader.load()[0]
        assert preset.Marca == "Jinko"
        assert preset.Referencia == "JKM410M-72H-V"


class TestXlsxLoader:
    def test_round_trip(self, tmp_path, all_presets):
        path = tmp_path / "modules.xlsx"
        pd.DataFrame([p.to_dict() for p in all_presets]).to_excel(path, index=False, engine="openpyxl")
        loaded = XlsxLoader(str(path)).load()
        assert [p.Referencia for p in loaded] == list_all_presets()
        assert loaded[0].Isc == "10.6"
        assert preset_to_params(loaded[0]) == preset_to_params(all_presets[0])


class TestAutoDetector:
    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file extension"):
            AutoDetector.get_loader(str(tmp_path / "modules.txt"))

    def test_extensions_follow_config(self, tmp_path, monkeypatch, default_preset):
        path = dump_presets_json([default_preset], tmp_path / "m.json")
        monkeypatch.setitem(INGESTION_CONFIG, "allowed_extensions", [".csv"])
        with pytest.raises(ValueError, match="Unsupported file extension"):
            AutoDetector.get_loader(str(path))

    def test_every_allowed_extension_has_a_loader(self):
        assert set(INGESTION_CONFIG["allowed_extensions"]) == set(AutoDetector.LOADERS)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AutoDetector.load_file(str(tmp_path / "missing.json"))

    def test_picks_loader_by_extension(self, tmp_path, default_preset):
        path = dump_presets_json([default_preset], tmp_path / "m.JSON")
        assert isinstance(AutoDetector.get_loader(str(path)), JsonLoader)

    def test_validation_failure(self, tmp_path):
        path = tmp_path / "noref.json"
        path.write_text(json.dumps([{"Isc": "5", "Voc": "20"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="validation failed"):
            AutoDetector.load_file(str(path))

    def test_batch_load(self, tmp_path, all_presets, caplog):
        good = dump_presets_json(all_presets, tmp_path / "good.json")
        paths = [str(good), str(tmp_path / "missing.csv"), str(tmp_path / "notes.txt")]
        modules, errors = AutoDetector.batch_load(paths)
        assert len(modules) == len(all_presets)
        assert [e["file"] for e in errors] == paths[1:]
        assert "Could not load" in caplog.text
