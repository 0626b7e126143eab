# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional, TypedDict

import typer
from rich.console import Console
from yaml import YAMLError

from lobchart.importer.schedule import ScheduleImportError, parse_schedule_file
from lobchart.logging_config import get_logger
from lobchart.model.filter import ScheduleFilter
from lobchart.model.schedule import ScheduleRow, ServiceColor, StageRecord
from lobchart.repository.configuration import CONFIGURATION_REPO
from lobchart.repository.obra import ObraFileRepository
from lobchart.service.export import export_to_spreadsheet
from lobchart.service.layout import layout_config, project
from lobchart.service.timeline import timeline_from_schedule
from lobchart.service.viewport import ViewportController
from lobchart.terminal.parse import parse_date
from lobchart.view.views.lob import (
    TERMINAL_DAY_WIDTH,
    TERMINAL_LABEL_WIDTH,
    lob_view,
    months_view,
)

logger = get_logger(__name__)

OBRA_FILE_EXTENSIONS = (".yaml", ".yml")


class LoadedSchedule(TypedDict):
    obra_name: str
    rows: list[ScheduleRow]
    stages: list[StageRecord]
    service_colors: list[ServiceColor]


def load_schedule(path: Path) -> LoadedSchedule:
    """
    Read a schedule from an obra YAML file or a CSV/XLSX sheet.

    Spreadsheets carry no stage registry or color table, so stages fall back to
    natural ordering and services to the fallback palette.
    """
    if path.suffix.lower() in OBRA_FILE_EXTENSIONS:
        repository = ObraFileRepository(path)
        try:
            loaded: LoadedSchedule = {
                "obra_name": repository.obra_name,
                "rows": repository.list_schedule(),
                "stages": repository.list_stages(),
                "service_colors": repository.list_service_colors(),
            }
        except (ValueError, YAMLError) as e:
            raise typer.BadParameter(f"Invalid obra file: {e}")
    else:
        try:
            rows = parse_schedule_file(path)
        except ScheduleImportError as e:
            raise typer.BadParameter(str(e))
        loaded = {"obra_name": path.stem, "rows": rows, "stages": [], "service_colors": []}

    logger.debug("Schedule loaded", path=str(path), rows=len(loaded["rows"]))
    return loaded


FileArgument = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Obra YAML file or CSV/XLSX schedule",
    ),
]


def chart(
    file: FileArgument,
    month: Annotated[
        Optional[int],
        typer.Option("--month", "-m", help="Month to start at (1 = first month)"),
    ] = None,
    compact: Annotated[
        bool, typer.Option("--compact", "-c", help="One full-width bar per track")
    ] = False,
    services: Annotated[
        Optional[list[str]],
        typer.Option("--service", "-s", help="Only show these services (accepts multiple)"),
    ] = None,
    stages: Annotated[
        Optional[list[str]],
        typer.Option("--stage", "-e", help="Only show these stages (accepts multiple)"),
    ] = None,
    date_from: Annotated[
        Optional[str],
        typer.Option("--from", "-f", help="Hide tasks ending before this date"),
    ] = None,
    date_to: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Hide tasks starting after this date"),
    ] = None,
) -> None:
    """Display the L.O.B. chart of a schedule."""
    loaded = load_schedule(file)
    config = CONFIGURATION_REPO.get_config()

    filters: ScheduleFilter = {
        "services": services or [],
        "stages": stages or [],
        "date_from": parse_date(date_from),
        "date_to": parse_date(date_to),
    }
    timeline = timeline_from_schedule(
        loaded["rows"],
        loaded["stages"],
        loaded["service_colors"],
        filters,
        config["locale"],
    )
    geometry = project(
        timeline,
        layout_config(
            day_width=TERMINAL_DAY_WIDTH,
            bar_height=1,
            bar_gap=0,
            label_column_width=TERMINAL_LABEL_WIDTH,
            compact=compact,
        ),
    )

    viewport = ViewportController(timeline["month_segments"] if timeline else None)
    if month is not None:
        viewport.go_to_month(month - 1)

    lob_view(loaded["obra_name"], timeline, geometry, viewport)


def months(file: FileArgument) -> None:
    """List the months covered by a schedule."""
    loaded = load_schedule(file)
    config = CONFIGURATION_REPO.get_config()
    timeline = timeline_from_schedule(
        loaded["rows"],
        loaded["stages"],
        loaded["service_colors"],
        locale=config["locale"],
    )
    months_view(loaded["obra_name"], timeline)


def export(
    file: FileArgument,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            file_okay=False,
            dir_okay=True,
            help="Directory for the spreadsheet (defaults to output_path, then the current directory)",
        ),
    ] = None,
) -> None:
    """Export the L.O.B. chart of a schedule to an Excel spreadsheet."""
    loaded = load_schedule(file)
    config = CONFIGURATION_REPO.get_config()
    timeline = timeline_from_schedule(
        loaded["rows"],
        loaded["stages"],
        loaded["service_colors"],
        locale=config["locale"],
    )

    directory = output
    if directory is None:
        directory = Path(config["output_path"]) if config["output_path"] else Path.cwd()

    result = export_to_spreadsheet(
        timeline,
        loaded["obra_name"],
        directory,
        layout_config(
            day_width=config["day_width"],
            bar_height=config["bar_height"],
            bar_gap=config["bar_gap"],
            label_column_width=config["label_column_width"],
        ),
    )

    console = Console()
    if result is None:
        console.print("[dim]No schedule data to export[/dim]")
        return
    if not result["ok"]:
        console.print(f"[red]Export failed:[/red] {result['error']}")
        raise typer.Exit(code=1)
    console.print(f"[green]Spreadsheet saved to[/green] {result['path']}")
