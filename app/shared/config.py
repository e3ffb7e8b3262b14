from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values


DEFAULT_ENV_FILE = ".env"

REQUIRED_VARIABLES = (
    "STRIPE_SECRET_KEY",
    "STRIPE_PUBLISHABLE_KEY",
    "STRIPE_WEBHOOK_SECRET",
    "SUBSCRIPTION_PLAN_ID",
    "DOMAIN",
    "STATIC_DIR",
)


class SettingsError(RuntimeError):
    """Raised when the environment file or a required variable is unusable."""


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    stripe_publishable_key: str
    stripe_webhook_secret: str
    subscription_plan_id: str
    domain: str
    static_dir: str


def _read_env_file(env_file: str | Path) -> dict[str, str]:
    path = Path(env_file)
    try:
        with path.open(encoding="utf-8") as stream:
            values = dotenv_values(stream=stream)
    except OSError as exc:
        raise SettingsError(f"Cannot read env file {path}: {exc}") from exc
    return {key: value for key, value in values.items() if value is not None}


def _env(values: Mapping[str, str], name: str) -> str:
    return (values.get(name) or "").strip()


def load_settings(
    env_file: str | Path = DEFAULT_ENV_FILE,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from ``env_file`` overlaid with the process environment.

    Variables already present in the process environment win over the file,
    and the file itself must exist. ``os.environ`` is never modified.
    """
    values = {**_read_env_file(env_file), **(os.environ if environ is None else environ)}

    missing = [name for name in REQUIRED_VARIABLES if not _env(values, name)]
    if missing:
        raise SettingsError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        stripe_secret_key=_env(values, "STRIPE_SECRET_KEY"),
        stripe_publishable_key=_env(values, "STRIPE_PUBLISHABLE_KEY"),
        stripe_webhook_secret=_env(values, "STRIPE_WEBHOOK_SECRET"),
        subscription_plan_id=_env(values, "SUBSCRIPTION_PLAN_ID"),
        domain=_env(values, "DOMAIN").rstrip("/"),
        static_dir=_env(values, "STATIC_DIR"),
    )
