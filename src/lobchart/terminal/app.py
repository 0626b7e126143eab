# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from lobchart import configuration as app_configuration
from lobchart.logging_config import configure_logging
from lobchart.repository.configuration import CONFIGURATION_REPO
from lobchart.terminal import configuration
from lobchart.terminal.chart import chart, export, months
from lobchart.terminal.custom_typer import AliasedTyperGroup
from lobchart.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="lobchart - Line of Balance charts for construction schedules",
    no_args_is_help=True,
)
app.command(name="chart, ch")(chart)
app.command(name="months, m")(months)
app.command(name="export, x")(export)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in charts",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override the configured logging level for this run",
        ),
    ] = None,
) -> None:
    """
    lobchart - Line of Balance charts for construction schedules

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)

    config = CONFIGURATION_REPO.get_config()
    configure_logging(
        log_level or config.get("log_level", app_configuration.DEFAULT_LOG_LEVEL)
    )


def run() -> None:
    app()
