"""Conversion of view models into rich renderables."""

from __future__ import annotations

from functools import singledispatch

from rich.align import Align
from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oltdash.core.model import QueryResult
from oltdash.render.views import (
    Cell,
    EmptyView,
    GaugePairView,
    GridView,
    TableView,
    TagsView,
    Tone,
    ValueView,
)

TONE_STYLES = {
    Tone.POSITIVE: "green",
    Tone.NEGATIVE: "red",
    Tone.CAUTION: "yellow",
    Tone.NEUTRAL: "grey50",
}


def cell_text(cell: Cell) -> Text:
    style = TONE_STYLES[cell.tone] if cell.tone is not None else ""
    if cell.badge:
        return Text(f" {cell.text} ", style=f"bold reverse {style}".strip())
    return Text(cell.text, style=style)


@singledispatch
def to_renderable(view: object) -> RenderableType:
    return Text(str(view))


@to_renderable.register
def _(view: EmptyView) -> RenderableType:
    return Align.center(Text(view.message, style="dim italic"))


@to_renderable.register
def _(view: TableView) -> RenderableType:
    table = Table(title=view.title, header_style="bold", expand=False)
    for column in view.columns:
        table.add_column(column, overflow="fold")
    for row in view.rows:
        table.add_row(*(cell_text(cell) for cell in row))
    return table


@to_renderable.register
def _(view: TagsView) -> RenderableType:
    return Columns([Text(f" {tag} ", style="reverse") for tag in view.tags])


@to_renderable.register
def _(view: GridView) -> RenderableType:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    for label, cell in view.entries:
        grid.add_row(label, cell_text(cell))
    if view.title:
        return Panel(grid, title=view.title, expand=False)
    return grid


@to_renderable.register
def _(view: ValueView) -> RenderableType:
    return Align.center(cell_text(view.cell))


@to_renderable.register
def _(view: GaugePairView) -> RenderableType:
    panels = [
        Panel(Align.center(Text(f"{gauge.value} {gauge.unit}", style="bold")), title=gauge.label, width=24)
        for gauge in (view.first, view.second)
    ]
    return Columns(panels)


def metadata_line(result: QueryResult) -> Text:
    parts = [
        f"Duration: {result.duration or '-'}",
        f"Timestamp: {result.timestamp or '-'}",
    ]
    if result.summary:
        parts.append(f"Summary: {result.summary}")
    return Text("  ".join(parts), style="dim")


def result_renderable(title: str, result: QueryResult, view: object) -> RenderableType:
    return Group(Text(title, style="bold"), metadata_line(result), to_renderable(view))
