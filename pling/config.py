"""Environment configuration for gateways.

Values are read from the process environment after loading a `.env` file
(python-dotenv). Library code never reads the environment on its own; this
module is for runners like `pling-send` that build gateways from env.

Environment:
- PLING_C2DM_EMAIL, PLING_C2DM_PASSWORD, PLING_C2DM_SOURCE (required for C2DM)
- PLING_C2DM_AUTHENTICATION_URL, PLING_C2DM_PUSH_URL (optional endpoint overrides)
- PLING_C2DM_PAYLOAD (1/true/yes: forward message payload as data.<key>)
- PLING_DEBUG (1/true/yes: log requests/responses, redacted)
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

from dotenv import load_dotenv

from .exceptions import MissingConfiguration

REQUIRED_C2DM_VARS: List[str] = [
    "PLING_C2DM_EMAIL",
    "PLING_C2DM_PASSWORD",
    "PLING_C2DM_SOURCE",
]


def _env_flag(var: str) -> bool:
    return os.getenv(var, "0").lower() in ("1", "true", "yes")


def load_env(path: str | None = None) -> None:
    # existing environment wins over the .env file
    load_dotenv(path, override=False)


def validate_keys(raise_on_missing: bool = False) -> List[str]:
    missing = [var for var in REQUIRED_C2DM_VARS if not os.getenv(var)]
    if missing and raise_on_missing:
        raise MissingConfiguration(f"Missing required env vars: {', '.join(missing)}")
    return missing


def c2dm_configuration_from_env() -> Dict[str, Any]:
    """Build a C2DMGateway configuration mapping from the environment."""
    validate_keys(raise_on_missing=True)
    config: Dict[str, Any] = {
        "email": os.getenv("PLING_C2DM_EMAIL"),
        "password": os.getenv("PLING_C2DM_PASSWORD"),
        "source": os.getenv("PLING_C2DM_SOURCE"),
        "payload": _env_flag("PLING_C2DM_PAYLOAD"),
        "debug": _env_flag("PLING_DEBUG"),
    }
    if os.getenv("PLING_C2DM_AUTHENTICATION_URL"):
        config["authentication_url"] = os.getenv("PLING_C2DM_AUTHENTICATION_URL")
    if os.getenv("PLING_C2DM_PUSH_URL"):
        config["push_url"] = os.getenv("PLING_C2DM_PUSH_URL")
    return config


__all__ = ["load_env", "validate_keys", "c2dm_configuration_from_env", "REQUIRED_C2DM_VARS"]
