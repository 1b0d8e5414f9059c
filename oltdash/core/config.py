"""Runtime settings for the query API client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from oltdash.core.errors import OltdashError

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> Settings:
        """Build settings from `OLTDASH_*` variables; non-None overrides win."""
        env = os.environ if environ is None else environ
        raw_timeout = env.get("OLTDASH_TIMEOUT", "").strip()
        try:
            timeout_s = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_S
        except ValueError as exc:
            raise OltdashError(f"OLTDASH_TIMEOUT must be a number of seconds, got '{raw_timeout}'") from exc

        values: dict[str, object] = {
            "api_url": env.get("OLTDASH_API_URL") or DEFAULT_API_URL,
            "timeout_s": timeout_s,
            "log_level": env.get("OLTDASH_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
