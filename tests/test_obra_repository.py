# tests/test_obra_repository.py
"""
Tests for the YAML obra file schedule source.
"""
import pytest

from lobchart.model.schedule import DEFAULT_SERVICE
from lobchart.repository.obra import ObraFileRepository
from lobchart.service.timeline import timeline_from_source

OBRA_YAML = """\
id: aurora
name: Residencial Aurora
stages:
  - {name: Cobertura, order: 1}
  - {name: Térreo, order: 2}
  - {name: "", order: 3}
services:
  - {name: Estrutura, color: "#F97316"}
  - {name: Pintura}
schedule:
  - {id: 1, item: Torre A, service: Estrutura, stage: Térreo, start: 2025-07-04, end: 2025-07-31}
  - {id: 2, service: Pintura, stage: Cobertura, start: "10/08/2025", end: "12/08/2025"}
  - {stage: Cobertura, start: "next week", end: 2025-08-20}
"""


@pytest.fixture
def obra_file(tmp_path):
    path = tmp_path / "aurora.yaml"
    path.write_text(OBRA_YAML, encoding="utf-8")
    return path


def test_obra_identity(obra_file):
    repository = ObraFileRepository(obra_file)

    assert repository.obra_id == "aurora"
    assert repository.obra_name == "Residencial Aurora"


def test_list_schedule_normalizes_rows(obra_file):
    rows = ObraFileRepository(obra_file).list_schedule()

    assert rows[0] == {
        "id": "1",
        "item": "Torre A",
        "service": "Estrutura",
        "stage": "Térreo",
        "start_date": "2025-07-04",
        "end_date": "2025-07-31",
    }
    assert rows[1]["item"] == "Cobertura"
    assert rows[1]["start_date"] == "2025-08-10"
    assert rows[2]["service"] == DEFAULT_SERVICE
    assert rows[2]["start_date"] == "next week"
    assert rows[2]["id"]


def test_list_stages_skips_unnamed_entries(obra_file):
    assert ObraFileRepository(obra_file).list_stages() == [
        {"name": "Cobertura", "order": 1},
        {"name": "Térreo", "order": 2},
    ]


def test_list_service_colors(obra_file):
    assert ObraFileRepository(obra_file).list_service_colors() == [
        {"name": "Estrutura", "color_hex": "#F97316"},
        {"name": "Pintura", "color_hex": None},
    ]


def test_name_defaults_to_file_stem(tmp_path):
    path = tmp_path / "obra-central.yaml"
    path.write_text("schedule: []\n", encoding="utf-8")

    assert ObraFileRepository(path).obra_name == "obra-central"


def test_non_mapping_document_is_rejected(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        ObraFileRepository(path).list_schedule()


def test_schedule_must_be_a_list(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("schedule: nope\n", encoding="utf-8")

    with pytest.raises(ValueError):
        ObraFileRepository(path).list_schedule()


def test_obra_file_feeds_the_timeline_pipeline(obra_file):
    """The file repository satisfies the schedule source interface."""
    repository = ObraFileRepository(obra_file)

    timeline = timeline_from_source(repository, repository.obra_id, locale="en")

    assert timeline["stages"] == ["Cobertura", "Térreo"]
    assert len(timeline["tasks"]) == 2
    assert timeline["legend"][0] == {"service": "Estrutura", "color": "#F97316"}


def test_boolean_stage_order_uses_position(tmp_path):
    path = tmp_path / "obra.yaml"
    path.write_text(
        "stages:\n  - {name: Cobertura, order: true}\n  - {name: Térreo, order: 5}\n",
        encoding="utf-8",
    )

    assert ObraFileRepository(path).list_stages() == [
        {"name": "Cobertura", "order": 1},
        {"name": "Térreo", "order": 5},
    ]
