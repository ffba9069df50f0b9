"""Runtime configuration read from the environment."""
from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    val = os.environ.get(name, "").strip()
    return float(val) if val else default


def _env_int(name: str, default: int) -> int:
    val = os.environ.get(name, "").strip()
    return int(val) if val else default


STATEMATE_ENV = os.getenv("STATEMATE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("STATEMATE_LOG_LEVEL", "INFO").upper()

# Nominal tick period for real-time sessions. Drift is acceptable.
TICK_SECONDS = _env_float("STATEMATE_TICK_SECONDS", 1.0)

# Simulated participants seated next to the human in multiplayer games
SIMULATED_PARTICIPANTS = _env_int("STATEMATE_SIMULATED_PARTICIPANTS", 3)
