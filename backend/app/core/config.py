"""
Runtime configuration from environment variables.
"""

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


# Simulation defaults
SIMULATION_COUNT = _int_env("SIMULATION_COUNT", 10000)
MAX_SIMULATIONS = _int_env("MAX_SIMULATIONS", 100000)
SIMULATION_WORKERS = _int_env("SIMULATION_WORKERS", 1)
SIMULATION_TIMEOUT = _float_env("SIMULATION_TIMEOUT", 30.0)

# CORS configuration
# In production, replace with specific frontend URL
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
