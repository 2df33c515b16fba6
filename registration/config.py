# registration/config.py
"""
Central configuration for the team registration service.

Design goals:
- Always load .env from the repository root in a deterministic way
- Resolve the team data file to an absolute path
- Provide "safe" diagnostics for the /api/diag/config endpoint
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from registration.utils import REPO_ROOT, env_path

load_dotenv(dotenv_path=REPO_ROOT / ".env", override=False)


# ---------------------------------------------------------------------
# 1) Application
# ---------------------------------------------------------------------
APP_TITLE = os.getenv("APP_TITLE", "Team Registration Service").strip()
APP_HOST = os.getenv("APP_HOST", "0.0.0.0").strip()
APP_PORT = int(os.getenv("APP_PORT", "8000"))

# Comma-separated list, "*" allows every origin
CORS_ALLOW_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
]


# ---------------------------------------------------------------------
# 2) Logging
# ---------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
if not isinstance(logging.getLevelName(LOG_LEVEL), int):
    raise RuntimeError(
        f"Invalid LOG_LEVEL='{LOG_LEVEL}'. Expected DEBUG|INFO|WARNING|ERROR|CRITICAL."
    )


# ---------------------------------------------------------------------
# 3) Storage
#
# The whole team collection lives in a single JSON file (array of records).
# Relative paths are resolved against the repository root.
# ---------------------------------------------------------------------
TEAMS_DATA_FILE = env_path("TEAMS_DATA_FILE", "data/teams.json")


def config_diag_safe() -> dict:
    """
    Safe diagnostics (no secrets).
    Used by the /api/diag/config endpoint.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "app_title": APP_TITLE,
        "app_host": APP_HOST,
        "app_port": APP_PORT,
        "log_level": LOG_LEVEL,
        "cors_allow_origins": CORS_ALLOW_ORIGINS,
        "teams_data_file": str(TEAMS_DATA_FILE),
    }
