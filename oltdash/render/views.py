"""Display-ready view model produced by render strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

PLACEHOLDER = "-"


class Tone(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    CAUTION = "caution"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Cell:
    text: str
    tone: Tone | None = None
    badge: bool = False


@dataclass(frozen=True)
class EmptyView:
    message: str


@dataclass(frozen=True)
class TableView:
    columns: tuple[str, ...]
    rows: tuple[tuple[Cell, ...], ...]
    title: str | None = None


@dataclass(frozen=True)
class TagsView:
    tags: tuple[str, ...]


@dataclass(frozen=True)
class GridView:
    entries: tuple[tuple[str, Cell], ...]
    title: str | None = None


@dataclass(frozen=True)
class ValueView:
    cell: Cell


@dataclass(frozen=True)
class Gauge:
    label: str
    value: str
    unit: str


@dataclass(frozen=True)
class GaugePairView:
    first: Gauge
    second: Gauge


Displayable = Union[EmptyView, TableView, TagsView, GridView, ValueView, GaugePairView]
