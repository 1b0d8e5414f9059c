from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from oltdash import cli
from oltdash.api import Client
from oltdash.core.config import Settings
from oltdash.transports.http import HttpApiTransport

runner = CliRunner()

CONNECTION_ARGS = ["--host", "10.0.0.1", "--username", "admin", "--password", "secret"]

ONU_LIST_RESPONSE = {
    "code": 200,
    "status": "OK",
    "data": {
        "query": "onu_list",
        "data": [{"onu_id": 1, "name": "Home-A", "status": "Online", "rx_power": "-15.3"}],
        "duration": "12ms",
        "timestamp": "2024-01-01T00:00:00Z",
    },
}


def _use_handler(monkeypatch: pytest.MonkeyPatch, handler, calls: list[dict] | None = None) -> None:
    def factory(*, settings: Settings | None = None, **kwargs):
        def recording(request: httpx.Request) -> httpx.Response:
            if calls is not None and request.method == "POST":
                calls.append(json.loads(request.content))
            return handler(request)

        settings = settings or Settings()
        return Client(
            settings=settings,
            transport=HttpApiTransport(settings, transport=httpx.MockTransport(recording)),
        )

    monkeypatch.setattr(cli, "Client", factory)


def test_queries_command_lists_categories() -> None:
    result = runner.invoke(cli.app, ["queries"])
    assert result.exit_code == 0
    assert "Core (core)" in result.stdout
    assert "onu_detail: ONU Detail [onu_id]" in result.stdout
    assert "onu_rename: Rename ONU [onu_id, name]" in result.stdout


def test_queries_command_filters_category() -> None:
    result = runner.invoke(cli.app, ["queries", "--category", "bandwidth"])
    assert result.exit_code == 0
    assert "voltage_info" in result.stdout
    assert "onu_list" not in result.stdout


def test_queries_command_unknown_category() -> None:
    result = runner.invoke(cli.app, ["queries", "--category", "firmware"])
    assert result.exit_code == 1
    assert "Unknown category 'firmware'" in result.stderr


def test_user_catalog_override_warning_goes_to_stderr(isolated_config: Path) -> None:
    user_dir = isolated_config / "oltdash" / "queries"
    user_dir.mkdir(parents=True)
    (user_dir / "lab.yaml").write_text(
        "categories:\n"
        "  - id: lab\n"
        "    name: Lab\n"
        "    queries:\n"
        "      - id: onu_list\n"
        "        name: Lab ONU List\n",
        encoding="utf-8",
    )

    result = runner.invoke(cli.app, ["queries", "--category", "lab"])

    assert result.exit_code == 0, result.stderr
    assert "Warning: User query 'onu_list' overrides an existing catalog entry" in result.stderr
    assert "onu_list: Lab ONU List" in result.stdout


def test_query_command_renders_table(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    _use_handler(monkeypatch, lambda request: httpx.Response(200, json=ONU_LIST_RESPONSE), calls)

    result = runner.invoke(cli.app, ["query", "onu_list", *CONNECTION_ARGS, "--pon", "3"])

    assert result.exit_code == 0, result.stderr
    assert "ONU List" in result.stdout
    assert "Home-A" in result.stdout
    assert "-15.30" in result.stdout
    assert "Duration: 12ms" in result.stdout
    assert calls[0]["pon"] == 3
    assert calls[0]["ip"] == "10.0.0.1"
    assert "onu_id" not in calls[0]


def test_query_command_json_output(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_handler(monkeypatch, lambda request: httpx.Response(200, json=ONU_LIST_RESPONSE))
    result = runner.invoke(cli.app, ["query", "onu_list", *CONNECTION_ARGS, "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)[0]["name"] == "Home-A"


def test_query_command_auth_error_is_clean(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_handler(monkeypatch, lambda request: httpx.Response(401))
    result = runner.invoke(cli.app, ["query", "system_info", *CONNECTION_ARGS])
    assert result.exit_code == 1
    assert "Error: Unauthorized - invalid username or password" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_query_command_validation_error_sends_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    _use_handler(monkeypatch, lambda request: httpx.Response(200, json=ONU_LIST_RESPONSE), calls)
    result = runner.invoke(cli.app, ["query", "onu_list", *CONNECTION_ARGS, "--port", "0"])
    assert result.exit_code == 1
    assert "Error: Port must be between 1 and 65535" in result.stderr
    assert calls == []


def test_query_command_unknown_query_warns_and_renders(monkeypatch: pytest.MonkeyPatch) -> None:
    payload = {"code": 200, "data": {"data": {"firmware": "V2.1.0"}, "duration": "3ms"}}
    _use_handler(monkeypatch, lambda request: httpx.Response(200, json=payload))
    result = runner.invoke(cli.app, ["query", "onu_firmware", *CONNECTION_ARGS])
    assert result.exit_code == 0
    assert "not in the query catalog" in result.stderr
    assert "V2.1.0" in result.stdout


def test_health_command(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_handler(monkeypatch, lambda request: httpx.Response(503))
    result = runner.invoke(cli.app, ["health", "--api-url", "http://api.test"])
    assert result.exit_code == 0
    assert "API http://api.test: unknown" in result.stdout


def test_dashboard_runs_queries_until_quit(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    _use_handler(monkeypatch, lambda request: httpx.Response(200, json=ONU_LIST_RESPONSE), calls)

    result = runner.invoke(
        cli.app,
        ["dashboard", *CONNECTION_ARGS],
        input="onu_list\n2\n4\nonu_detail\n\n\n9\nquit\n",
    )

    assert result.exit_code == 0, result.stderr
    assert "Connected to 10.0.0.1:161 (C320)" in result.stdout
    assert "Home-A" in result.stdout
    assert calls[0]["board"] == 2
    assert calls[0]["pon"] == 4
    assert calls[1]["query"] == "onu_detail"
    assert calls[1]["onu_id"] == 9


def test_dashboard_reports_errors_and_continues(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_handler(
        monkeypatch,
        lambda request: httpx.Response(200, json={"code": 500, "message": "SNMP timeout"}),
    )
    result = runner.invoke(
        cli.app,
        ["dashboard", *CONNECTION_ARGS],
        input="system_info\n\n\ndisconnect\n",
    )
    assert result.exit_code == 0
    assert "Error: SNMP timeout" in result.stderr
    assert "Disconnected" in result.stdout
