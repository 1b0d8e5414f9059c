"""Result rendering: a dispatch table of per-query strategies over untyped payloads.

Queries without a bespoke strategy, and bespoke strategies handed a payload of
an unexpected shape, fall through to `render_generic`, which picks the most
specific of five shape cases in a fixed order:

1. empty list            -> EmptyView
2. list led by a mapping -> TableView (columns from the first row)
3. any other list        -> TagsView
4. mapping               -> GridView
5. anything else         -> ValueView

Rendering never raises on payload content.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from oltdash.render.formatting import (
    classify_power,
    classify_status,
    format_uptime,
    format_value,
    humanize_key,
    parse_number,
)
from oltdash.render.views import (
    PLACEHOLDER,
    Cell,
    Displayable,
    EmptyView,
    Gauge,
    GaugePairView,
    GridView,
    TableView,
    TagsView,
    ValueView,
)

RenderStrategy = Callable[[Any], Displayable]

_MISSING = object()


def _is_list(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes))


def status_cell(value: Any) -> Cell:
    if value is None or value == "":
        return Cell(PLACEHOLDER)
    return Cell(format_value(value), tone=classify_status(value), badge=True)


def power_cell(value: Any) -> Cell:
    reading = classify_power(value)
    return Cell(reading.text, tone=reading.tone)


def value_cell(value: Any) -> Cell:
    if value == "":
        return Cell(PLACEHOLDER)
    return Cell(format_value(value))


def _is_power_reading(key: str, value: Any) -> bool:
    """Optical readings are keyed `*_power` and carry a dBm number."""
    if not (key == "power" or key.endswith("_power")) or isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float)) and parse_number(value) is not None


def _cell_for_key(key: Any, value: Any) -> Cell:
    lowered = str(key).lower()
    if value is _MISSING:
        return Cell(PLACEHOLDER)
    if "status" in lowered and isinstance(value, (str, int)) and not isinstance(value, bool):
        return status_cell(value)
    if _is_power_reading(lowered, value):
        return power_cell(value)
    return value_cell(value)


def _field(row: Any, key: str) -> Any:
    return row.get(key) if isinstance(row, Mapping) else None


# --- generic ---------------------------------------------------------------


def _generic_table(rows: Sequence[Any], title: str | None = None) -> TableView:
    keys = list(rows[0].keys())
    body = tuple(
        tuple(
            _cell_for_key(key, row.get(key, _MISSING) if isinstance(row, Mapping) else _MISSING)
            for key in keys
        )
        for row in rows
    )
    return TableView(columns=tuple(humanize_key(k) for k in keys), rows=body, title=title)


def render_generic(data: Any) -> Displayable:
    if _is_list(data):
        if len(data) == 0:
            return EmptyView("No data returned")
        if isinstance(data[0], Mapping):
            return _generic_table(data)
        return TagsView(tuple(format_value(item) for item in data))
    if isinstance(data, Mapping):
        return GridView(tuple((humanize_key(k), _cell_for_key(k, v)) for k, v in data.items()))
    return ValueView(Cell(format_value(data)))


# --- bespoke ---------------------------------------------------------------


def render_system_info(data: Any) -> Displayable:
    if not isinstance(data, Mapping):
        return render_generic(data)
    uptime = data.get("uptime")
    return GridView(
        (
            ("Name", value_cell(data.get("name"))),
            ("Description", value_cell(data.get("description"))),
            ("Uptime", Cell(format_uptime(uptime) if uptime not in (None, "") else PLACEHOLDER)),
            ("Contact", value_cell(data.get("contact"))),
            ("Location", value_cell(data.get("location"))),
        ),
        title="System",
    )


def _list_strategy(
    columns: Sequence[tuple[str, str, Callable[[Any], Cell]]],
    empty_message: str,
    *,
    accept_single: bool = False,
) -> RenderStrategy:
    """Build a strategy rendering a list of rows with fixed (label, key, cell) columns."""

    def strategy(data: Any) -> Displayable:
        if accept_single and isinstance(data, Mapping):
            data = [data]
        if not _is_list(data):
            return render_generic(data)
        if len(data) == 0:
            return EmptyView(empty_message)
        return TableView(
            columns=tuple(label for label, _, _ in columns),
            rows=tuple(tuple(make(_field(row, key)) for _, key, make in columns) for row in data),
        )

    return strategy


render_onu_list = _list_strategy(
    (
        ("ONU ID", "onu_id", value_cell),
        ("Name", "name", value_cell),
        ("Type", "type", value_cell),
        ("Serial Number", "serial_number", value_cell),
        ("RX Power", "rx_power", power_cell),
        ("Status", "status", status_cell),
    ),
    "No ONUs found on this PON",
)

render_boards = _list_strategy(
    (
        ("Board", "board_id", value_cell),
        ("Type", "type", value_cell),
        ("Real Type", "real_type", value_cell),
        ("Status", "status", status_cell),
        ("Ports", "port_count", value_cell),
        ("CPU %", "cpu_load", value_cell),
        ("Memory %", "mem_usage", value_cell),
        ("Software", "soft_ver", value_cell),
    ),
    "No boards reported",
    accept_single=True,
)

render_fans = _list_strategy(
    (
        ("Fan", "index", value_cell),
        ("Speed Level", "speed_level", value_cell),
        ("Speed", "speed", value_cell),
        ("Status", "status", status_cell),
        ("Present", "present", value_cell),
    ),
    "No fans reported",
)

render_empty_slots = _list_strategy(
    (
        ("Board", "board", value_cell),
        ("PON", "pon", value_cell),
        ("ONU ID", "onu_id", value_cell),
    ),
    "No empty slots on this PON",
)


def _gauge_value(value: Any) -> str:
    num = parse_number(value)
    if num is None:
        return PLACEHOLDER
    return f"{num:g}"


def _scalar_pair_strategy(readings: tuple[tuple[str, str], tuple[str, str]], unit: str) -> RenderStrategy:
    (first_key, first_label), (second_key, second_label) = readings

    def strategy(data: Any) -> Displayable:
        if not isinstance(data, Mapping) or first_key not in data or second_key not in data:
            return render_generic(data)
        return GaugePairView(
            first=Gauge(first_label, _gauge_value(data[first_key]), unit),
            second=Gauge(second_label, _gauge_value(data[second_key]), unit),
        )

    return strategy


render_temperature = _scalar_pair_strategy((("system_temp", "System"), ("cpu_temp", "CPU")), "°C")
render_voltage = _scalar_pair_strategy((("system_voltage", "System"), ("cpu_voltage", "CPU")), "V")


def _nested_list_strategy(key: str, noun: str, empty_message: str) -> RenderStrategy:
    """Strategy for `{count, <key>: [...]}` payloads."""

    def strategy(data: Any) -> Displayable:
        if not isinstance(data, Mapping) or not _is_list(data.get(key)):
            return render_generic(data)
        items = data[key]
        if len(items) == 0:
            return EmptyView(empty_message)
        if not isinstance(items[0], Mapping):
            return render_generic(items)
        count = data.get("count", len(items))
        return _generic_table(items, title=f"{format_value(count)} {noun}")

    return strategy


render_vlans = _nested_list_strategy("vlans", "VLANs", "No VLANs configured")
render_profiles = _nested_list_strategy("profiles", "profiles", "No bandwidth profiles configured")


DEFAULT_STRATEGIES: dict[str, RenderStrategy] = {
    "system_info": render_system_info,
    "onu_list": render_onu_list,
    "board_info": render_boards,
    "all_boards": render_boards,
    "fan_info": render_fans,
    "empty_slots": render_empty_slots,
    "temperature_info": render_temperature,
    "voltage_info": render_voltage,
    "vlan_list": render_vlans,
    "profile_list": render_profiles,
}


class ResultRenderer:
    def __init__(self, strategies: Mapping[str, RenderStrategy] | None = None) -> None:
        self._strategies = dict(DEFAULT_STRATEGIES if strategies is None else strategies)

    def register(self, query_id: str, strategy: RenderStrategy) -> None:
        self._strategies[query_id] = strategy

    def strategy_for(self, query_id: str) -> RenderStrategy:
        return self._strategies.get(query_id, render_generic)

    def render(self, query_id: str, data: Any) -> Displayable:
        return self.strategy_for(query_id)(data)
