"""Tests for settings loading and the CLI entry point."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

import cli
from contact_book.config import ConfigError, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any .env file."""
    for var in ("CONTACT_BOOK_FILE", "CONTACT_BOOK_LOG_LEVEL", "CONTACT_BOOK_ENV"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(use_dotenv=False)

        assert settings.contacts_file == Path("contacts.json")
        assert settings.log_level == "WARNING"
        assert settings.log_level_value == logging.WARNING
        assert settings.environment == "local"

    def test_environment_values(self, monkeypatch):
        monkeypatch.setenv("CONTACT_BOOK_FILE", "/data/book.json")
        monkeypatch.setenv("CONTACT_BOOK_LOG_LEVEL", "debug")
        monkeypatch.setenv("CONTACT_BOOK_ENV", "test")

        settings = load_settings(use_dotenv=False)

        assert settings.contacts_file == Path("/data/book.json")
        assert settings.log_level == "DEBUG"
        assert settings.environment == "test"

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("CONTACT_BOOK_FILE", "env.json")

        settings = load_settings(contacts_file="arg.json", log_level="info", use_dotenv=False)

        assert settings.contacts_file == Path("arg.json")
        assert settings.log_level == "INFO"

    def test_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("CONTACT_BOOK_FILE=from_dotenv.json\n", encoding="utf-8")
        # load_dotenv writes into os.environ; register the var so it is cleaned up
        monkeypatch.setenv("CONTACT_BOOK_FILE", "")
        monkeypatch.delenv("CONTACT_BOOK_FILE")

        settings = load_settings()

        assert settings.contacts_file == Path("from_dotenv.json")

    def test_unknown_log_level(self):
        with pytest.raises(ConfigError, match="Unknown log level"):
            load_settings(log_level="chatty", use_dotenv=False)

    def test_blank_contacts_file(self, monkeypatch):
        monkeypatch.setenv("CONTACT_BOOK_FILE", "   ")
        with pytest.raises(ConfigError):
            load_settings(use_dotenv=False)


class TestCliMain:

    def test_runs_menu_and_exits(self, tmp_path, monkeypatch, capsys):
        answers = iter(["1", "Jane Doe", "5551234567", "jane@example.com", "6"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        path = tmp_path / "book.json"

        assert cli.main(["--file", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Success: Contact created successfully" in out
        assert "Goodbye!" in out
        assert json.loads(path.read_text(encoding="utf-8"))[0]["name"] == "Jane Doe"

    def test_log_format_includes_environment(self):
        assert "[staging]" in cli._log_format("staging")

    def test_bad_log_level_returns_error(self, capsys):
        assert cli.main(["--log-level", "loud"]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_keyboard_interrupt(self, tmp_path, monkeypatch):
        def interrupt(prompt=""):
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", interrupt)

        assert cli.main(["--file", str(tmp_path / "book.json")]) == 130
