# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every knob has a safe default; bad values fall back to it.
- Simulation timings are expressed in seconds.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data ----
    data_dir: Path
    store_key: str

    # ---- Workflow simulation ----
    transition_delay_min: float
    transition_delay_max: float
    transition_failure_rate: float
    enforce_transition_rules: bool

    # ---- Storage simulation ----
    store_delay_min: float
    store_delay_max: float

    # ---- Board ----
    retry_limit: int
    error_log_size: int

    # ---- Reproducible runs ----
    random_seed: int | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskflow").strip() or "taskflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow"))
        store_key = _env(_k("STORE_KEY"), "workflow_sim_data").strip() or "workflow_sim_data"

        t_min = max(0.0, _env_float(_k("TRANSITION_DELAY_MIN"), 0.5))
        t_max = max(t_min, _env_float(_k("TRANSITION_DELAY_MAX"), 3.0))
        failure_rate = min(1.0, max(0.0, _env_float(_k("TRANSITION_FAILURE_RATE"), 0.15)))
        enforce = _env_bool(_k("ENFORCE_TRANSITION_RULES"), False)

        s_min = max(0.0, _env_float(_k("STORE_DELAY_MIN"), 0.1))
        s_max = max(s_min, _env_float(_k("STORE_DELAY_MAX"), 0.3))

        retry_limit = max(0, _env_int(_k("RETRY_LIMIT"), 0))
        error_log_size = max(1, _env_int(_k("ERROR_LOG_SIZE"), 50))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_key=store_key,
            transition_delay_min=t_min,
            transition_delay_max=t_max,
            transition_failure_rate=failure_rate,
            enforce_transition_rules=enforce,
            store_delay_min=s_min,
            store_delay_max=s_max,
            retry_limit=retry_limit,
            error_log_size=error_log_size,
            random_seed=_env_optional_int(_k("RANDOM_SEED")),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
