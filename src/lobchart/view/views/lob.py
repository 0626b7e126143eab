# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.padding import Padding
from rich.text import Text

from lobchart.color import hex_to_rich
from lobchart.model.geometry import (
    BarGeometry,
    DayCell,
    HeaderCell,
    StageGeometry,
    TimelineGeometry,
)
from lobchart.model.task import LegendEntry
from lobchart.model.timeline import Timeline
from lobchart.service.viewport import ViewportController
from lobchart.time import date_to_display_str
from lobchart.view.views.header import header

# Terminal cells per day column ("01 ")
TERMINAL_DAY_WIDTH = 3
TERMINAL_LABEL_WIDTH = 24

SHADED_STYLE = "on grey23"
UNSHADED_STYLE = "on grey15"


def lob_view(
    obra_name: str,
    timeline: Optional[Timeline],
    geometry: Optional[TimelineGeometry],
    viewport: ViewportController,
    console: Optional[Console] = None,
) -> None:
    """
    Display a L.O.B. chart in the terminal.

    The chart is paged by month: the window starts at the viewport's current
    month and shows as many day columns as fit the console. Geometry must have
    been projected with TERMINAL_DAY_WIDTH day columns at scale 1.

    Args:
        obra_name: The name of the obra shown in the header
        timeline: Layout model from compute_timeline
        geometry: Projection of the timeline (see layout.project)
        viewport: Paging state; its current month decides the first column
        console: Console to print to (defaults to a new Console)
    """
    console = console if console is not None else Console()
    header(console, obra_name, "L.O.B.")

    if timeline is None or geometry is None:
        console.print("\n[dim]No schedule data to display[/dim]\n")
        return

    day_width = int(geometry["day_width"]) or TERMINAL_DAY_WIDTH
    label_width = int(geometry["label_column_width"])
    total_days = len(geometry["day_header"])
    available_width = max(console.width - label_width, day_width)
    first, last = viewport.visible_day_range(day_width, available_width, total_days)

    day_grid = timeline["day_grid"]
    console.print(
        f"\n[bold]Timeline ({date_to_display_str(day_grid['start'])} – "
        f"{date_to_display_str(day_grid['end'])})[/bold]\n"
    )

    chart_elements: list[Text] = []
    chart_elements.append(
        _build_month_row("Mês", geometry["month_header"], first, last, day_width, label_width)
    )
    chart_elements.append(
        _build_day_row("Dia", geometry["day_header"], first, last, day_width, label_width)
    )

    for stage_index, stage in enumerate(geometry["stages"]):
        chart_elements.extend(
            _build_stage_rows(
                stage,
                geometry["day_header"],
                first,
                last,
                day_width,
                label_width,
                geometry["compact"],
            )
        )
        if stage_index < len(geometry["stages"]) - 1:
            chart_elements.append(
                _build_separator(geometry["day_header"], first, last, day_width, label_width)
            )

    chart_elements.append(
        _build_day_row("Dia", geometry["day_header"], first, last, day_width, label_width)
    )
    chart_elements.append(
        _build_month_row("Mês", geometry["month_header"], first, last, day_width, label_width)
    )

    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))
    console.print(_build_legend(timeline["legend"]))

    segment = viewport.current_segment
    month = segment["label"] if segment is not None else "Sem meses"
    console.print(
        f"\n[dim]Mostrando {len(geometry['stages'])} etapa(s) · "
        f"{escape(month)} ({viewport.current_month_index + 1}/{len(viewport.segments)})[/dim]\n"
    )


def months_view(obra_name: str, timeline: Optional[Timeline], console: Optional[Console] = None) -> None:
    """List the month segments of a timeline with their paging index."""
    console = console if console is not None else Console()
    header(console, obra_name, "Meses")

    if timeline is None:
        console.print("\n[dim]No schedule data to display[/dim]\n")
        return

    console.print()
    days = timeline["day_grid"]["days"]
    for segment in timeline["month_segments"]:
        first_day = days[segment["start_index"]]
        last_day = days[segment["start_index"] + segment["span_days"] - 1]
        style = "bold cyan" if segment["segment_index"] % 2 == 0 else "cyan"
        console.print(
            f"  [dim]{segment['segment_index'] + 1:>3}[/dim]  [{style}]{escape(segment['label']):<10}[/{style}]"
            f"  {date_to_display_str(first_day)} – {date_to_display_str(last_day)}"
            f"  [dim]({segment['span_days']} dias)[/dim]"
        )
    console.print()


def _fit_label(label: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(label) > width:
        return label[: max(width - 3, 0)] + "..." if width > 3 else label[:width]
    return label.ljust(width)


def _band_style(shaded: bool) -> str:
    return SHADED_STYLE if shaded else UNSHADED_STYLE


def _build_month_row(
    label: str,
    month_header: list[HeaderCell],
    first: int,
    last: int,
    day_width: int,
    label_width: int,
) -> Text:
    row = Text()
    row.append(_fit_label(label, label_width), style="bold")

    for cell in month_header:
        start = max(cell["start_index"], first)
        end = min(cell["start_index"] + cell["span_days"], last)
        if start >= end:
            continue
        width = (end - start) * day_width
        row.append(
            cell["label"][:width].center(width),
            style=f"bold {_band_style(cell['shaded'])}",
        )
    return row


def _build_day_row(
    label: str,
    day_header: list[DayCell],
    first: int,
    last: int,
    day_width: int,
    label_width: int,
) -> Text:
    row = Text()
    row.append(_fit_label(label, label_width), style="bold")

    for cell in day_header[first:last]:
        text = f"{cell['day_of_month']:02d}"[:day_width].ljust(day_width)
        row.append(text, style=f"cyan {_band_style(cell['shaded'])}")
    return row


def _build_separator(
    day_header: list[DayCell],
    first: int,
    last: int,
    day_width: int,
    label_width: int,
) -> Text:
    row = Text("─" * label_width, style="dim")
    for cell in day_header[first:last]:
        row.append("─" * day_width, style=f"dim {_band_style(cell['shaded'])}")
    return row


def _build_stage_rows(
    stage: StageGeometry,
    day_header: list[DayCell],
    first: int,
    last: int,
    day_width: int,
    label_width: int,
    compact: bool,
) -> list[Text]:
    """
    Build one terminal row per track of a stage.

    The stage name is written on the first track only; bars are painted over
    the month banding using the service color, with the service name on the
    bar when it fits.
    """
    bars_by_track: dict[int, list[BarGeometry]] = {}
    for bar in stage["bars"]:
        bars_by_track.setdefault(bar["track_index"], []).append(bar)

    rows: list[Text] = []
    for track_index in range(stage["track_count"]):
        row = Text()
        stage_label = stage["stage"] if track_index == 0 else ""
        row.append(
            _fit_label(stage_label, label_width),
            style="bold plum1" if track_index == 0 else "",
        )

        width = (last - first) * day_width
        chars = [" "] * width
        styles = [_band_style(cell["shaded"]) for cell in day_header[first:last] for _ in range(day_width)]

        for bar in bars_by_track.get(track_index, []):
            if compact:
                bar_start, bar_end = first, last - 1
            else:
                bar_start, bar_end = bar["start_index"], bar["end_index"]
            start = max(bar_start, first)
            end = min(bar_end + 1, last)
            if start >= end:
                continue

            bar_style = f"bold {hex_to_rich(bar['text_color'])} on {hex_to_rich(bar['color'])}"
            offset = (start - first) * day_width
            length = (end - start) * day_width
            for position in range(offset, offset + length):
                styles[position] = bar_style

            if not compact:
                text = bar["service"][: max(length - 1, 0)]
                for i, char in enumerate(text):
                    chars[offset + i] = char

        # Merge runs of equal style into single Text spans
        i = 0
        while i < width:
            j = i
            while j < width and styles[j] == styles[i]:
                j += 1
            row.append("".join(chars[i:j]), style=styles[i])
            i = j

        rows.append(row)
    return rows


def _build_legend(legend: list[LegendEntry]) -> Text:
    text = Text(" ")
    for entry in legend:
        text.append("  ", style=f"on {hex_to_rich(entry['color'])}")
        text.append(f" {entry['service']}   ")
    return text
