from __future__ import annotations

import logging
import os
from dataclasses import dataclass


DEFAULT_USER_AGENT = "fetch-mediawiki-configuration/0.1"
DEFAULT_API_PATH = "/w/api.php"


@dataclass(frozen=True)
class Config:
    user_agent: str = DEFAULT_USER_AGENT
    api_path: str = DEFAULT_API_PATH
    log_level: int = logging.WARNING


def load_config() -> Config:
    def _load_api_path() -> str:
        raw = os.getenv("MWCONF_API_PATH", "").strip()
        if not raw:
            return DEFAULT_API_PATH
        if not raw.startswith("/"):
            raise RuntimeError("MWCONF_API_PATH must start with '/'")
        return raw

    def _load_log_level() -> int:
        raw = os.getenv("MWCONF_LOG_LEVEL", "").strip()
        if not raw:
            return logging.WARNING
        level = logging.getLevelName(raw.upper())
        if not isinstance(level, int):
            raise RuntimeError(f"MWCONF_LOG_LEVEL is not a logging level: {raw}")
        return level

    cfg = Config(
        user_agent=os.getenv("MWCONF_USER_AGENT") or DEFAULT_USER_AGENT,
        api_path=_load_api_path(),
        log_level=_load_log_level(),
    )
    return cfg
