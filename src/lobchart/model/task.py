# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from lobchart.model.entity_id import EntityId


class Task(TypedDict):
    id: EntityId
    stage: str
    service: str
    start: pendulum.Date
    end: pendulum.Date
    color: str


class LegendEntry(TypedDict):
    service: str
    color: str
