"""
Tests for terminal interaction: output helpers, TerminalPrompter and the CLI entry point.

Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import importlib
import re
import sys
from pathlib import Path

import pytest
from loguru import logger

from changeset_ai import output
from changeset_ai.cli.main import main
from changeset_ai.cli.prompter import TerminalPrompter, parse_selection
from changeset_ai.config import Config
from changeset_ai.credentials import FileCredentialStore
from changeset_ai.discovery import Package
from changeset_ai.log import configure_logging
from changeset_ai.output import format_bumps, printable
from changeset_ai.suggestion import Suggestion

# changeset_ai.cli re-exports main(), which shadows the submodule attribute
main_module = importlib.import_module("changeset_ai.cli.main")

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def answers(monkeypatch):
    """Feed input() from a list. Running out behaves like Ctrl-D."""
    queue = []

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return queue


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Isolated home, default config and silent logging for main()."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.setattr(main_module, "load_config", lambda: Config())
    monkeypatch.setattr(main_module, "configure_logging", lambda verbose: None)
    monkeypatch.delenv("CHANGESET_PROVIDER", raising=False)
    monkeypatch.delenv("CHANGESET_MODEL", raising=False)
    return home


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

class TestFormatBumps:

    def test_one_line_per_package(self, strip_ansi):
        out = strip_ansi(format_bumps({"pkg-a": "minor", "@s/b": "major"}))
        lines = out.split('\n')
        assert len(lines) == 2
        assert lines[0].endswith("pkg-a: minor")
        assert lines[1].endswith("@s/b: major")

    def test_empty(self):
        assert format_bumps({}) == ""


class TestPrintable:

    def test_plain_text_unchanged(self):
        assert printable("Fix bug in parser") == "Fix bug in parser"

    def test_newlines_escaped(self):
        assert printable("one\ntwo\r") == "one\\ntwo\\r"

    @pytest.mark.parametrize("control", ["\x1b", "\x07", "\x00", "\x7f", "\x9b", "\x08"])
    def test_control_characters_removed(self, control):
        assert control not in printable(f"ok{control}[2Jdone")

    def test_unicode_kept(self):
        assert printable("Añadir función ✓") == "Añadir función ✓"


# ---------------------------------------------------------------------------
# Selection parsing
# ---------------------------------------------------------------------------

class TestParseSelection:

    @pytest.mark.parametrize("choice, expected", [
        ("1", [0]),
        ("1,3", [0, 2]),
        ("2-4", [1, 2, 3]),
        ("1, 1, 2", [0, 1]),
        ("a", [0, 1, 2, 3]),
    ])
    def test_valid(self, choice, expected):
        assert parse_selection(choice, 4) == expected

    @pytest.mark.parametrize("choice", ["0", "5", "x", "", "1-9", ","])
    def test_invalid(self, choice):
        assert parse_selection(choice, 4) is None


# ---------------------------------------------------------------------------
# TerminalPrompter
# ---------------------------------------------------------------------------

class TestTerminalPrompter:

    @pytest.fixture
    def packages(self):
        return [Package("root", Path("/w")), Package("pkg-a", Path("/w/a")), Package("pkg-b", Path("/w/b"))]

    def test_select_packages(self, answers, packages):
        answers.extend(["1,3"])
        selected = TerminalPrompter().select_packages(packages)
        assert [p.name for p in selected] == ["root", "pkg-b"]

    def test_select_packages_retries_then_quits(self, answers, packages, capsys):
        answers.extend(["9", "q"])
        assert TerminalPrompter().select_packages(packages) is None
        assert "Enter numbers between 1 and 3" in capsys.readouterr().out

    def test_select_bump_by_number(self, answers):
        answers.append("2")
        assert TerminalPrompter().select_bump("pkg-a") == "minor"

    def test_select_bump_by_name(self, answers):
        answers.extend(["MAJOR", "patch"])
        assert TerminalPrompter().select_bump("pkg-a") == "patch"

    def test_select_bump_eof_cancels(self, answers):
        assert TerminalPrompter().select_bump("pkg-a") is None

    def test_ask_summary(self, answers):
        answers.append("Fix bug")
        assert TerminalPrompter().ask_summary() == "Fix bug"

    def test_confirm_suggestion_shows_bumps(self, answers, capsys, strip_ansi):
        answers.append("y")
        suggestion = Suggestion(bumps={"pkg-a": "minor"}, summary="Add feature")
        assert TerminalPrompter().confirm_suggestion(suggestion) is True
        out = strip_ansi(capsys.readouterr().out)
        assert '"Add feature"' in out
        assert "pkg-a: minor" in out

    def test_confirm_view_strips_terminal_sequences(self, answers, capsys, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", False)
        answers.append("n")
        suggestion = Suggestion(bumps={"pkgA": "patch"}, summary="ok\x1b[2J\x1b[Hspoofed\nline")
        TerminalPrompter().confirm_suggestion(suggestion)
        out = capsys.readouterr().out
        assert "\x1b" not in out
        assert "spoofed\\nline" in out

    def test_confirm_defaults_to_no(self, answers):
        answers.append("")
        assert TerminalPrompter().confirm_suggestion(Suggestion({"pkg-a": "patch"}, "x")) is False


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

class TestMain:

    def test_empty_changeset(self, tmp_path, cli_env, answers, capsys):
        (tmp_path / "package.json").write_text('{"name": "solo"}')
        answers.append("Docs only")

        assert main(["--empty", "-C", str(tmp_path)]) == 0
        files = list((tmp_path / ".changeset").glob("changeset-*.md"))
        assert len(files) == 1
        assert files[0].read_text() == "---\n---\n\nDocs only\n"
        assert "Changeset created successfully!" in capsys.readouterr().out

    def test_manual_cancel_exits_zero(self, tmp_path, cli_env, answers, capsys):
        (tmp_path / "package.json").write_text('{"name": "solo"}')
        assert main(["-C", str(tmp_path)]) == 0
        assert "cancelled" in capsys.readouterr().out
        assert not (tmp_path / ".changeset").exists()

    def test_failure_exits_one(self, tmp_path, cli_env, capsys):
        assert main(["-C", str(tmp_path)]) == 1
        assert "No packages found" in capsys.readouterr().err

    def test_set_key_rejects_bad_format(self, cli_env, monkeypatch, capsys):
        monkeypatch.setattr("getpass.getpass", lambda prompt="": "tooshort")
        assert main(["--set-key"]) == 1
        assert FileCredentialStore().get("gemini_api_key") is None

    def test_set_and_clear_key(self, cli_env, monkeypatch, api_key):
        monkeypatch.setattr("getpass.getpass", lambda prompt="": api_key)
        assert main(["--set-key"]) == 0
        assert FileCredentialStore().get("gemini_api_key") == api_key

        assert main(["--clear-key"]) == 0
        assert FileCredentialStore().get("gemini_api_key") is None

    def test_clear_key_when_none_stored(self, cli_env, capsys):
        assert main(["--clear-key"]) == 0
        assert "No Gemini" in capsys.readouterr().out

    def test_display_config(self, cli_env, capsys, strip_ansi):
        assert main(["--display-config"]) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "provider:        gemini" in out
        assert "api key:         not set" in out

    def test_provider_override_from_env(self, cli_env, monkeypatch, capsys, strip_ansi):
        monkeypatch.setenv("CHANGESET_PROVIDER", "claude")
        assert main(["--display-config"]) == 0
        assert "provider:        claude" in strip_ansi(capsys.readouterr().out)

    def test_invalid_env_provider_warns(self, cli_env, monkeypatch, capsys, strip_ansi):
        monkeypatch.setenv("CHANGESET_PROVIDER", "openai")
        assert main(["--display-config"]) == 0
        captured = capsys.readouterr()
        assert "Invalid provider 'openai'" in captured.err
        assert "provider:        gemini" in strip_ansi(captured.out)

    def test_ai_and_empty_are_exclusive(self, cli_env):
        with pytest.raises(SystemExit):
            main(["--ai", "--empty"])


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_quiet_by_default(self, capsys):
        configure_logging(verbose=False)
        logger.debug("hidden detail")
        logger.warning("visible warning")
        err = capsys.readouterr().err
        assert "hidden detail" not in err
        assert "visible warning" in err

    def test_verbose_shows_debug(self, capsys):
        configure_logging(verbose=True)
        logger.debug("shown detail")
        assert "shown detail" in capsys.readouterr().err
