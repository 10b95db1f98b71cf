"""Tests for grantree.logging module."""

from __future__ import annotations

import json
import logging

import pytest

from grantree import (
    GrantsConfig,
    GrantsFormatter,
    LogLevel,
    MemoryTree,
    bind,
    get_grants_logger,
    safe_preview,
    setup_logging,
)


def _record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSafePreview:
    """Tests for safe_preview function."""

    def test_none_value(self) -> None:
        """Test that None returns empty string."""
        assert safe_preview(None) == ""

    def test_string_with_whitespace(self) -> None:
        """Test that whitespace is normalized."""
        assert safe_preview(" read\n\t=write  ") == "read =write"

    def test_string_truncation(self) -> None:
        """Test that long strings are truncated."""
        result = safe_preview("a" * 300, limit=100)
        assert len(result) == 100
        assert result.endswith("…")

    def test_structured_value(self) -> None:
        """Dicts and lists are rendered as JSON."""
        assert '"user.alice"' in safe_preview({"user.alice": " read "})
        assert "editors" in safe_preview(["staff", "editors"])


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_with_config(self) -> None:
        """Test logging setup with GrantsConfig."""
        setup_logging(config=GrantsConfig(log_level=LogLevel.DEBUG), json_format=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_with_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test logging setup loading from environment."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        setup_logging(json_format=False)
        assert logging.getLogger().level == logging.WARNING

    def test_json_format(self, capsys: pytest.CaptureFixture) -> None:
        """Test JSON format output."""
        setup_logging(config=GrantsConfig(log_level=LogLevel.INFO), json_format=True)

        logging.getLogger("test").info("Test message")

        stderr_output = capsys.readouterr().err.strip()
        assert stderr_output.startswith("{")
        data = json.loads(stderr_output)
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["logger"] == "test"

    def test_json_from_config(self, capsys: pytest.CaptureFixture) -> None:
        """json_format falls back to config.log_json."""
        setup_logging(config=GrantsConfig(log_json=True))

        logging.getLogger("test").info("Test message")

        assert capsys.readouterr().err.strip().startswith("{")

    def test_plain_format(self, capsys: pytest.CaptureFixture) -> None:
        """Test plain text format output."""
        setup_logging(config=GrantsConfig(log_level=LogLevel.INFO), json_format=False)

        logging.getLogger("test").info("Test message")

        stderr_output = capsys.readouterr().err.strip()
        assert "INFO" in stderr_output
        assert "Test message" in stderr_output
        assert not stderr_output.startswith("{")


class TestGrantsLogger:
    """Tests for the grants logger adapter."""

    def test_logger_with_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Bound user and path land on the record."""
        logger = get_grants_logger("test", user="alice", path="/docs/")

        with caplog.at_level(logging.INFO):
            logger.info("Test message")

        record = caplog.records[0]
        assert record.user == "alice"
        assert record.path == "/docs/"

    def test_logger_override_per_call(self, caplog: pytest.LogCaptureFixture) -> None:
        """Per-call user/path override the bound ones."""
        logger = get_grants_logger("test", user="alice")

        with caplog.at_level(logging.INFO):
            logger.info("Test message", user="bob", path="/a/")

        record = caplog.records[0]
        assert record.user == "bob"
        assert record.path == "/a/"

    def test_logger_without_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """No context, no extra attributes."""
        logger = get_grants_logger("test")

        with caplog.at_level(logging.INFO):
            logger.info("Test message")

        assert not hasattr(caplog.records[0], "user")


class TestDecisionLogging:
    """check() logs decisions when enabled."""

    def test_decisions_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Decision records carry user, path and the effective grants."""
        tree = MemoryTree()
        grants = bind(tree.cd("/a/"), user="alice", config=GrantsConfig(log_decisions=True))
        grants.set_user_grants("read")

        with caplog.at_level(logging.DEBUG, logger="grantree.grants.resolver"):
            assert grants.check("read")
            assert not grants.check("write")

        messages = [r.getMessage() for r in caplog.records if hasattr(r, "grants")]
        assert messages == ["granted read", "denied write"]
        record = next(r for r in caplog.records if hasattr(r, "grants"))
        assert record.user == "alice"
        assert record.path == "/a/"
        assert record.grants == " read "

    def test_decisions_silent_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without log_decisions no decision records are emitted."""
        grants = bind(MemoryTree().cd("/"), user="alice")

        with caplog.at_level(logging.DEBUG, logger="grantree.grants.resolver"):
            grants.check("read")

        assert not any(hasattr(r, "grants") for r in caplog.records)


class TestGrantsFormatter:
    """Tests for GrantsFormatter."""

    def test_json_format(self) -> None:
        """JSON output includes grant context and extras."""
        record = _record()
        record.user = "alice"
        record.path = "/docs/"
        record.grants = " read "

        data = json.loads(GrantsFormatter(json_format=True).format(record))
        assert data["level"] == "INFO"
        assert data["user"] == "alice"
        assert data["path"] == "/docs/"
        assert data["grants"] == "read"

    def test_plain_format(self) -> None:
        """Plain text output includes grant context."""
        record = _record()
        record.user = "alice"

        result = GrantsFormatter(json_format=False).format(record)
        assert "INFO" in result
        assert "Test message" in result
        assert "user=alice" in result
