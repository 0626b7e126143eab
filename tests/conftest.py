# tests/conftest.py
"""
Shared fixtures for the lobchart test-suite.
Run with: pytest -v
"""
from typing import Optional

import pendulum
import pytest

from lobchart import configuration
from lobchart.logging_config import configure_logging
from lobchart.model.schedule import ScheduleRow
from lobchart.model.task import Task
from lobchart.repository.configuration import CONFIGURATION_REPO
from lobchart.view import state as view_state


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Route structlog through stdlib logging on stderr for the whole run."""
    configure_logging("WARNING")


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the configuration file at a temporary directory."""
    config_path = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    CONFIGURATION_REPO.reset()
    view_state.set_show_header(True)
    yield config_path
    CONFIGURATION_REPO.reset()
    view_state.set_show_header(True)


@pytest.fixture
def make_row():
    """Factory for raw schedule rows."""
    counter = {"next": 0}

    def _make_row(
        stage: str,
        service: str,
        start: str,
        end: str,
        row_id: Optional[str] = None,
        item: str = "Torre A",
    ) -> ScheduleRow:
        counter["next"] += 1
        return {
            "id": row_id or f"row-{counter['next']}",
            "item": item,
            "service": service,
            "stage": stage,
            "start_date": start,
            "end_date": end,
        }

    return _make_row


@pytest.fixture
def make_task():
    """Factory for validated tasks with ISO date strings."""
    counter = {"next": 0}

    def _make_task(
        stage: str,
        service: str,
        start: str,
        end: str,
        color: str = "#2563EB",
        task_id: Optional[str] = None,
    ) -> Task:
        counter["next"] += 1
        return {
            "id": task_id or f"task-{counter['next']}",
            "stage": stage,
            "service": service,
            "start": pendulum.parse(start).date(),
            "end": pendulum.parse(end).date(),
            "color": color,
        }

    return _make_task


@pytest.fixture
def terreo_tasks(make_task):
    """Two overlapping services on the ground floor, July to August 2025."""
    return [
        make_task("Térreo", "Estrutura", "2025-07-04", "2025-07-31", "#F97316", "t1"),
        make_task("Térreo", "Acabamento", "2025-07-20", "2025-08-05", "#22C55E", "t2"),
    ]
