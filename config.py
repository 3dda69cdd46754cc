import os
from dataclasses import dataclass
from typing import Sequence

from dotenv import load_dotenv

DEFAULT_AUTOSAVE_SECONDS = 1.0
DEFAULT_DRAFT_SLOT_KEY = "event_draft"


@dataclass(frozen=True)
class BotConfig:
    token: str
    admin_ids: Sequence[int]


@dataclass(frozen=True)
class DatabaseConfig:
    dsn: str


@dataclass(frozen=True)
class WizardConfig:
    autosave_seconds: float
    draft_slot_key: str


@dataclass(frozen=True)
class Config:
    bot: BotConfig
    database: DatabaseConfig
    wizard: WizardConfig


def _parse_admin_ids(raw: str | None) -> Sequence[int]:
    if not raw:
        return ()
    result: list[int] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            result.append(int(chunk))
        except ValueError as error:
            raise RuntimeError("ADMIN_IDS must be a comma-separated list of integers") from error
    return tuple(result)


def load_config() -> Config:
    load_dotenv()
    token = _require_env("BOT_TOKEN")
    dsn = _require_env("DATABASE_URL")
    admin_ids = _parse_admin_ids(os.getenv("ADMIN_IDS"))

    autosave_raw = os.getenv("DRAFT_AUTOSAVE_SECONDS")
    autosave_seconds = DEFAULT_AUTOSAVE_SECONDS
    if autosave_raw:
        autosave_seconds = _parse_positive_float(autosave_raw, "DRAFT_AUTOSAVE_SECONDS")

    draft_slot_key = (os.getenv("DRAFT_SLOT_KEY") or "").strip() or DEFAULT_DRAFT_SLOT_KEY

    return Config(
        bot=BotConfig(token=token, admin_ids=admin_ids),
        database=DatabaseConfig(dsn=dsn),
        wizard=WizardConfig(autosave_seconds=autosave_seconds, draft_slot_key=draft_slot_key),
    )


def _require_env(key: str) -> str:
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"{key} is not set")
    return value


def _parse_positive_float(raw: str, key: str) -> float:
    try:
        value = float(raw)
    except ValueError as error:
        raise RuntimeError(f"{key} must be a number") from error
    if value <= 0:
        raise RuntimeError(f"{key} must be greater than zero")
    return value
