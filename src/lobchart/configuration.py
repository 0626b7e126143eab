# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

import platformdirs

APP_NAME = "lobchart"

CONFIG_PATH: Path = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"

# Layout constants, mirrored in the default configuration
DAY_WIDTH = 28
BAR_HEIGHT = 18
BAR_GAP = 8
LABEL_COLUMN_WIDTH = 160
DEFAULT_LOCALE = "pt_br"
DEFAULT_LOG_LEVEL = "WARNING"

# Zoom and fit bounds for the expanded view
ZOOM_MIN = 0.2
ZOOM_MAX = 6.0
ZOOM_DEFAULT = 1.0
FIT_SCALE_FLOOR = 0.8
FIT_SCALE_MAX = 1.0
WHEEL_ZOOM_STEP = 0.1
BUTTON_ZOOM_STEP = 0.2

# Bars are inset so adjacent services do not touch
BAR_INSET = 6


class Configuration(TypedDict):
    day_width: int
    bar_height: int
    bar_gap: int
    label_column_width: int
    locale: str
    output_path: Optional[str]
    log_level: NotRequired[str]


def default_configuration() -> Configuration:
    return {
        "day_width": DAY_WIDTH,
        "bar_height": BAR_HEIGHT,
        "bar_gap": BAR_GAP,
        "label_column_width": LABEL_COLUMN_WIDTH,
        "locale": DEFAULT_LOCALE,
        "output_path": None,
        "log_level": DEFAULT_LOG_LEVEL,
    }
