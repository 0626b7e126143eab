# SPDX-License-Identifier: MIT

import atexit

from lobchart.repository.configuration import CONFIGURATION_REPO
from lobchart.service.export import shutdown_export_executor


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()

    # Let pending spreadsheet writes finish before the interpreter exits
    shutdown_export_executor()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
