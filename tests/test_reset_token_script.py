"""Tests for scripts.reset_token (issue/validate from the command line)."""

import pytest

from app.core.config import get_settings
from scripts.reset_token import main


def test_issue_then_validate(reset_env: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["issue", "a@x.com"]) == 0
    token = capsys.readouterr().out.strip()
    assert token.count(".") == 1

    assert main(["validate", token]) == 0
    assert capsys.readouterr().out.strip() == "valid: a@x.com"


def test_validate_expired_token_fails(
    reset_env: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["issue", "a@x.com", "--ttl-hours", "0"]) == 0
    token = capsys.readouterr().out.strip()
    assert main(["validate", token]) == 1
    assert "Token has expired" in capsys.readouterr().err


def test_validate_garbage(reset_env: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate", "garbage"]) == 1
    assert "Invalid token format" in capsys.readouterr().err


def test_missing_secret(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("RESET_TOKEN_SECRET", "")
    get_settings.cache_clear()
    try:
        assert main(["issue", "a@x.com"]) == 1
        assert "RESET_TOKEN_SECRET is required" in capsys.readouterr().err
    finally:
        get_settings.cache_clear()
