from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "schedule-health"
_DEFAULT_APP_VERSION = "1.0.0"


def get_app_version() -> str:
    """Version stamped on support events: env override, then the installed distribution."""
    env_override = (os.getenv("SCHEDULE_HEALTH_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
