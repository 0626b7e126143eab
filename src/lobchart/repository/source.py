# SPDX-License-Identifier: MIT

from typing import Protocol

from lobchart.model.schedule import ScheduleRow, ServiceColor, StageRecord


class ScheduleSource(Protocol):
    """Read side of the storage collaborator that owns obras and their schedules."""

    def list_schedule(self, obra_id: str) -> list[ScheduleRow]: ...

    def list_stages(self, obra_id: str) -> list[StageRecord]: ...

    def list_service_colors(self, obra_id: str) -> list[ServiceColor]: ...
