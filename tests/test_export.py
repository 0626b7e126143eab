# tests/test_export.py
"""
Tests for the spreadsheet projection and the .xlsx writer.
"""
import pytest
from openpyxl import load_workbook

from lobchart.service import export as export_service
from lobchart.service.export import (
    build_export_sheet,
    export_file_name,
    export_to_spreadsheet,
    submit_export,
)
from lobchart.service.layout import layout_config
from lobchart.service.timeline import compute_timeline


@pytest.fixture
def timeline(terreo_tasks, make_task):
    tasks = terreo_tasks + [make_task("Cobertura", "Pintura", "2025-08-10", "2025-08-12", "#FACC15")]
    return compute_timeline(tasks, ["Cobertura", "Térreo"], "pt_br")


def _merge_set(sheet):
    return {
        (merge["start_row"], merge["start_column"], merge["end_row"], merge["end_column"])
        for merge in sheet["merges"]
    }


def test_file_name_is_slugged():
    assert export_file_name("Residencial Aurora") == "lob-Residencial-Aurora.xlsx"
    assert export_file_name("Edifício São João!") == "lob-Edificio-Sao-Joao.xlsx"
    assert export_file_name(None) == "lob-timeline.xlsx"


def test_nothing_to_export_is_none(tmp_path):
    assert build_export_sheet(None) is None
    assert export_to_spreadsheet(None, "Aurora", tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_sheet_layout(timeline):
    sheet = build_export_sheet(timeline, "Aurora")
    kinds = [row["kind"] for row in sheet["rows"]]

    assert sheet["title"] == "L.O.B."
    assert sheet["freeze_cell"] == "B3"
    assert kinds == [
        "month_header",
        "day_header",
        "track",
        "spacer",
        "track",
        "track",
        "footer_day",
        "footer_month",
    ]
    assert len(sheet["column_widths"]) == 63
    assert sheet["column_widths"][0] == round(160 / 6.5, 2)
    assert sheet["column_widths"][1] == round(28 / 6.5, 2)


def test_header_rows(timeline):
    sheet = build_export_sheet(timeline, "Aurora")
    month_row, day_row = sheet["rows"][0], sheet["rows"][1]

    assert month_row["cells"][0]["value"] == "Etapa"
    assert month_row["cells"][1]["value"] == "JUL 2025"
    assert month_row["cells"][1]["fill"] == "FFE5E7EB"
    assert month_row["cells"][32]["fill"] == "FFD1D5DB"
    assert day_row["cells"][1]["value"] == 1
    assert day_row["cells"][1]["fill"] == "FFF1F5F9"
    assert day_row["cells"][32]["fill"] == "FFE2E8F0"

    merges = _merge_set(sheet)
    assert (1, 1, 2, 1) in merges
    assert (1, 2, 1, 32) in merges
    assert (1, 33, 1, 63) in merges


def test_stage_label_only_on_first_track(timeline):
    sheet = build_export_sheet(timeline, "Aurora")
    first_track, second_track = sheet["rows"][4], sheet["rows"][5]

    assert first_track["cells"][0]["value"] == "Térreo"
    assert first_track["cells"][0]["bold"] is True
    assert first_track["cells"][0]["fill"] == "FFF8FAFC"
    assert second_track["cells"][0]["value"] == ""
    assert second_track["cells"][0]["fill"] == "FFFFFFFF"


def test_bars_are_merged_over_their_days(timeline):
    sheet = build_export_sheet(timeline, "Aurora")
    estrutura_row = sheet["rows"][4]

    # Estrutura runs 07-04 to 07-31: day indices 3 to 30, columns 5 to 32
    assert (5, 5, 5, 32) in _merge_set(sheet)
    assert estrutura_row["cells"][4]["value"] == "Estrutura"
    assert estrutura_row["cells"][4]["fill"] == "FFF97316"
    assert estrutura_row["cells"][5]["value"] is None
    assert estrutura_row["cells"][3]["fill"] == "FFF1F5F9"


def test_spacer_and_footer_rows(timeline):
    sheet = build_export_sheet(timeline, "Aurora", layout_config(bar_gap=2))
    spacer = sheet["rows"][3]
    footer_day, footer_month = sheet["rows"][-2], sheet["rows"][-1]

    assert spacer["height"] == 4
    assert footer_day["cells"][0]["value"] == "Dia"
    assert footer_month["cells"][0]["value"] == "Mês"
    assert (8, 2, 8, 32) in _merge_set(sheet)


def test_written_workbook_matches_sheet(timeline, tmp_path):
    result = export_to_spreadsheet(timeline, "Residencial Aurora", tmp_path)

    assert result["ok"] is True
    assert result["error"] is None
    path = tmp_path / "lob-Residencial-Aurora.xlsx"
    assert result["path"] == str(path)

    workbook = load_workbook(path)
    worksheet = workbook["L.O.B."]
    assert worksheet.freeze_panes == "B3"
    assert worksheet["A1"].value == "Etapa"
    assert worksheet["B1"].value == "JUL 2025"
    assert worksheet["A3"].value == "Cobertura"
    assert worksheet["E5"].value == "Estrutura"
    assert worksheet["A7"].value == "Dia"
    assert worksheet["A8"].value == "Mês"
    merged = {str(cell_range) for cell_range in worksheet.merged_cells.ranges}
    assert "A1:A2" in merged
    assert "E5:AF5" in merged


def test_write_failure_is_reported_not_raised(timeline, tmp_path, monkeypatch):
    def broken(sheet):
        raise OSError("disk full")

    monkeypatch.setattr(export_service, "export_to_bytes", broken)

    result = export_to_spreadsheet(timeline, "Aurora", tmp_path)

    assert result["ok"] is False
    assert result["error"] == "disk full"
    assert not (tmp_path / "lob-Aurora.xlsx").exists()


def test_submit_export_writes_in_background(timeline, tmp_path):
    future = submit_export(timeline, "Aurora", tmp_path)

    result = future.result(timeout=30)

    assert result["ok"] is True
    assert (tmp_path / "lob-Aurora.xlsx").is_file()


def test_submit_export_without_data_resolves_to_none(tmp_path):
    assert submit_export(None, "Aurora", tmp_path).result(timeout=5) is None
