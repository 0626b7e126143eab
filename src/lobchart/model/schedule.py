# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from lobchart.model.entity_id import EntityId

DEFAULT_ITEM = "Item não informado"
DEFAULT_SERVICE = "Serviço não informado"
DEFAULT_STAGE = "Etapa não informada"


class ScheduleRow(TypedDict):
    id: EntityId
    item: str
    service: str
    stage: str
    start_date: str
    end_date: str


class StageRecord(TypedDict):
    name: str
    order: int


class ServiceColor(TypedDict):
    name: str
    color_hex: Optional[str]
