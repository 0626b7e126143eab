# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from lobchart import configuration
from lobchart.repository.configuration import CONFIGURATION_REPO
from lobchart.terminal.custom_typer import AliasedTyperGroup
from lobchart.time import is_known_locale

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("day_width", str(config["day_width"]))
    table.add_row("bar_height", str(config["bar_height"]))
    table.add_row("bar_gap", str(config["bar_gap"]))
    table.add_row("label_column_width", str(config["label_column_width"]))
    table.add_row("locale", config["locale"])
    table.add_row(
        "log_level", config.get("log_level", configuration.DEFAULT_LOG_LEVEL)
    )
    table.add_row("output_path", config["output_path"] or "None (current directory)")
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    return table


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_configuration_table())

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        from yaml import Loader  # type: ignore[assignment] # noqa: F401

        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    day_width: Annotated[
        Optional[int],
        typer.Option("--day-width", min=1, help="Width of one day column in pixels"),
    ] = None,
    bar_height: Annotated[
        Optional[int],
        typer.Option("--bar-height", min=1, help="Height of a service bar in pixels"),
    ] = None,
    bar_gap: Annotated[
        Optional[int],
        typer.Option("--bar-gap", min=0, help="Vertical gap between tracks in pixels"),
    ] = None,
    label_column_width: Annotated[
        Optional[int],
        typer.Option("--label-width", min=0, help="Width of the stage label column in pixels"),
    ] = None,
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", help="Locale for month labels (e.g. pt_br, en)"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    output_path: Annotated[
        Optional[str],
        typer.Option("--output-path", help="Default directory for exported spreadsheets"),
    ] = None,
    remove_output_path: Annotated[
        bool,
        typer.Option(
            "--remove-output-path",
            help="Reset output path to None (use current directory)",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    if locale is not None and not is_known_locale(locale):
        raise typer.BadParameter(f"Unknown locale: {locale}", param_hint="--locale")
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Unknown log level: {log_level}", param_hint="--log-level"
        )

    CONFIGURATION_REPO.update_config(
        day_width=day_width,
        bar_height=bar_height,
        bar_gap=bar_gap,
        label_column_width=label_column_width,
        locale=locale,
        log_level=log_level,
        output_path=output_path,
        remove_output_path=remove_output_path,
    )
    CONFIGURATION_REPO.flush()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table("Updated Configuration"))
