from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    config_home = tmp_path / "cfg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in ("OLTDASH_API_URL", "OLTDASH_TIMEOUT", "OLTDASH_LOG_LEVEL", "OLTDASH_USERNAME", "OLTDASH_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    return config_home
