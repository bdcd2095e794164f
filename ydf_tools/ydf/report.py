from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .layout import EVENT_FIELDS, HEADER_FIELDS, SIGNAL_FIELDS, FieldSpec
from .recording import YdfRecording


def _field_table(record: Any, fields: Sequence[FieldSpec], title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for spec in fields:
        table.add_row(spec.title, str(getattr(record, spec.name)), spec.description)
    return table


def _sizes_table(recording: YdfRecording) -> Table:
    table = Table(title="General Information", show_header=False, box=None)
    table.add_column("Quantity", style="bold")
    table.add_column("Bytes", justify="right")
    table.add_row("Size of Header", str(recording.size_of_header))
    table.add_row("Size of Data", str(recording.data_size))
    table.add_row("Total Size", str(recording.file_size))
    table.add_row("Expected Size of Header", str(recording.expected_size_of_header))
    table.add_row("Data Record Size", str(recording.data_record_size))
    table.add_row("Data Records", str(recording.data_record_count))
    table.add_row("Event Block Size", str(recording.event_block_size))
    return table


def print_header(recording: YdfRecording, console: Console | None = None) -> None:
    console = console or Console()
    console.print(
        Panel(
            _field_table(recording.header, HEADER_FIELDS),
            title=f"YDF: {recording.filename}",
            subtitle=f"{recording.file_size} bytes",
            border_style="blue",
        )
    )
    for position, signal in enumerate(recording.signals, start=1):
        console.print(Panel(_field_table(signal, SIGNAL_FIELDS), title=f"Signal {position}", border_style="cyan"))
    for position, event in enumerate(recording.events, start=1):
        console.print(Panel(_field_table(event, EVENT_FIELDS), title=f"Event {position}", border_style="magenta"))
    console.print(Panel(_sizes_table(recording), border_style="green"))
