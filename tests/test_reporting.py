"""Tests for chart, CSV, Excel and text reporting."""

import math

import numpy as np
import pandas as pd
import pytest

from pv_simulator import simulate
from pv_simulator.reporting import (
    annotation_points,
    axis_limits,
    decimate,
    export_to_csv,
    export_to_excel,
    generate_summary,
    is_error_acceptable,
    summary_table,
    to_chart_data,
    to_dataframe,
    write_csv,
)


@pytest.fixture
def jinko_result(jinko_params):
    return simulate(jinko_params)


class TestChartData:
    def test_records(self, jinko_result):
        records = to_chart_data(jinko_result)
        assert len(records) == 201
        assert set(records[0]) == {"voltage", "current", "power"}
        assert records[0]["voltage"] == 0.0
        assert records[50]["current"] == round(float(jinko_result.current[50]), 4)

    @pytest.mark.parametrize("step, expected", [(1, 201), (4, 51), (3, 68)])
    def test_decimate(self, jinko_result, step, expected):
        voltage, current, power = decimate(jinko_result, step)
        assert len(voltage) == len(current) == len(power) == expected
        assert voltage[-1] == jinko_result.voltage[-1]

    def test_decimate_invalid_step(self, jinko_result):
        with pytest.raises(ValueError):
            decimate(jinko_result, 0)

    def test_annotation_points(self, jinko_result, jinko_params):
        points = annotation_points(jinko_result, jinko_params)
        assert points["isc"] == (0.0, 10.6)
        assert points["voc"] == (50.4, 0.0)
        assert points["mpp"] == (jinko_result.vmpp, jinko_result.impp)
        v_cross, i_cross = points["voc_curve"]
        assert v_cross == pytest.approx(50.4, abs=0.5)
        assert i_cross == 0.0

    def test_axis_limits(self, jinko_result, jinko_params):
        limits = axis_limits(jinko_result, jinko_params)
        assert limits["voltage"] == (0.0, pytest.approx(1.05 * 50.4))
        assert limits["power"][1] == pytest.approx(jinko_result.pmax_calc * 1.1)
        assert limits["current"][1] >= 10.6


class TestCsvExport:
    def test_header_block(self, jinko_result, jinko_params):
        lines = export_to_csv(jinko_result, jinko_params).split("\n")
        assert lines[0] == "# Módulo: Jinko - JKM410M-72H-V"
        assert lines[1] == "# Modelo: Lambert W - Expansión analítica de Barry"
        assert lines[2] == f"# Vmpp: {jinko_result.vmpp:.4f} V | Impp: {jinko_result.impp:.4f} A"
        assert lines[3].startswith("# Pmax: ")
        assert lines[4] == ""
        assert lines[5] == "Voltaje (V),Corriente (A),Potencia (W)"

    def test_rows(self, jinko_result, jinko_params):
        rows = export_to_csv(jinko_result, jinko_params).split("\n")[6:]
        assert len(rows) == 201
        assert rows[0].startswith("0.000000,")
        assert all(len(field.split(".")[1]) == 6 for field in rows[100].split(","))
        assert rows[-1].endswith(",0.000000")

    def test_write_csv(self, tmp_path, jinko_result, jinko_params):
        path = write_csv(jinko_result, jinko_params, tmp_path / "exports" / "curve.csv")
        assert path.read_text(encoding="utf-8") == export_to_csv(jinko_result, jinko_params)

    def test_dataframe(self, jinko_result):
        df = to_dataframe(jinko_result)
        assert list(df.columns) == ["Voltaje (V)", "Corriente (A)", "Potencia (W)"]
        np.testing.assert_array_equal(df["Potencia (W)"].to_numpy(), jinko_result.power)


class TestExcelExport:
    def test_workbook(self, tmp_path, jinko_result, jinko_params):
        path = export_to_excel(jinko_result, jinko_params, tmp_path / "curve.xlsx")
        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert list(sheets) == ["Curva I-V", "Resumen"]

        data = sheets["Curva I-V"]
        assert len(data) == 201
        assert data["Corriente (A)"].iloc[0] == pytest.approx(jinko_result.current[0], abs=1e-6)

        summary = sheets["Resumen"]
        assert summary["Parámetro"].iloc[0] == "Módulo"
        assert summary["Valor"].iloc[0] == "Jinko JKM410M-72H-V"


class TestSummary:
    def test_table(self, jinko_result, jinko_params):
        table = summary_table(jinko_result, jinko_params)
        assert list(table.columns) == ["Parámetro", "Valor", "Unidad"]
        values = dict(zip(table["Parámetro"], table["Valor"]))
        assert values["Modelo"] == jinko_result.model_name
        assert values["Pmax calculada"] == jinko_result.pmax_calc
        assert values["Pmax fabricante"] == 410.0

    def test_text(self, jinko_result, jinko_params):
        text = generate_summary(jinko_result, jinko_params)
        assert "Jinko JKM410M-72H-V" in text
        assert jinko_result.model_name in text
        assert "(aceptable)" in text

    def test_text_without_area_or_reference(self, jinko_params):
        params = jinko_params.replace(acelda=0.0, pmax=0.0)
        result = simulate(params)
        text = generate_summary(result, params)
        assert "Eficiencia:  n/d %" in text
        assert "fuera de tolerancia" in text

    def test_error_threshold(self, jinko_result):
        assert is_error_acceptable(jinko_result)
        assert not is_error_acceptable(jinko_result, threshold=0.1)
        assert not math.isnan(jinko_result.error_percent)
