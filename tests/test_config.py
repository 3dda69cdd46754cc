"""Tests for environment configuration."""

import pytest

import config
from config import load_config

ENV_KEYS = ("BOT_TOKEN", "DATABASE_URL", "ADMIN_IDS", "DRAFT_AUTOSAVE_SECONDS", "DRAFT_SLOT_KEY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/eventdesk")


def test_defaults():
    loaded = load_config()

    assert loaded.bot.token == "123:abc"
    assert loaded.bot.admin_ids == ()
    assert loaded.database.dsn == "postgresql://localhost/eventdesk"
    assert loaded.wizard.autosave_seconds == 1.0
    assert loaded.wizard.draft_slot_key == "event_draft"


def test_admin_ids_are_parsed(monkeypatch):
    monkeypatch.setenv("ADMIN_IDS", "1, 2,,3")
    assert load_config().bot.admin_ids == (1, 2, 3)


def test_invalid_admin_ids_fail_fast(monkeypatch):
    monkeypatch.setenv("ADMIN_IDS", "1,admin")
    with pytest.raises(RuntimeError, match="ADMIN_IDS"):
        load_config()


@pytest.mark.parametrize("key", ["BOT_TOKEN", "DATABASE_URL"])
def test_required_variables(monkeypatch, key):
    monkeypatch.delenv(key)
    with pytest.raises(RuntimeError, match=key):
        load_config()


def test_wizard_settings(monkeypatch):
    monkeypatch.setenv("DRAFT_AUTOSAVE_SECONDS", "2.5")
    monkeypatch.setenv("DRAFT_SLOT_KEY", "wizard_draft")

    loaded = load_config()

    assert loaded.wizard.autosave_seconds == 2.5
    assert loaded.wizard.draft_slot_key == "wizard_draft"


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_invalid_autosave_interval(monkeypatch, raw):
    monkeypatch.setenv("DRAFT_AUTOSAVE_SECONDS", raw)
    with pytest.raises(RuntimeError, match="DRAFT_AUTOSAVE_SECONDS"):
        load_config()
