"""
Unit tests for ConsoleEmailSender adapter.

Tests verify the console email sender implements EmailSender protocol
and logs confirmation codes in the correct format.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from vestra.adapters.smtp.console import ConsoleEmailSender


class TestConsoleEmailSenderProtocol:
    """Tests for EmailSender protocol compliance."""

    def test_implements_email_sender_protocol(self) -> None:
        """ConsoleEmailSender implements EmailSender protocol."""
        from vestra.domain.ports import EmailSender

        sender = ConsoleEmailSender()
        assert callable(sender.send_confirmation_code)

        def accepts_email_sender(s: EmailSender) -> None:
            pass

        accepts_email_sender(sender)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleEmailSender uses structural subtyping, not inheritance."""
        bases = ConsoleEmailSender.__bases__
        assert bases == (object,), f"Expected only object as base, got {bases}"


class TestSendConfirmationCode:
    """Tests for send_confirmation_code method."""

    def test_logs_message_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send_confirmation_code("test@example.com", "123456")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    def test_log_format(self, caplog: pytest.LogCaptureFixture) -> None:
        """Log format: [CONFIRMATION] Email: ... Code: ..."""
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send_confirmation_code("user@example.com", "056789")

        assert "[CONFIRMATION]" in caplog.text
        assert "Email: user@example.com" in caplog.text
        assert "Code: 056789" in caplog.text

    def test_reports_success(self) -> None:
        assert ConsoleEmailSender().send_confirmation_code("test@example.com", "123456") is True


class TestThreadSafety:
    """Tests for thread-safe logging."""

    def test_concurrent_logging_is_thread_safe(self, caplog: pytest.LogCaptureFixture) -> None:
        """Multiple concurrent calls don't corrupt log output."""
        sender = ConsoleEmailSender()
        emails = [f"user{i}@example.com" for i in range(10)]
        codes = [f"{i:06d}" for i in range(10)]

        with caplog.at_level(logging.INFO), ThreadPoolExecutor(max_workers=5) as executor:
            futures = [
                executor.submit(sender.send_confirmation_code, email, code)
                for email, code in zip(emails, codes, strict=True)
            ]
            for f in futures:
                f.result()

        assert len(caplog.records) == 10
        for record in caplog.records:
            assert "[CONFIRMATION]" in record.message
            assert "Email:" in record.message
            assert "Code:" in record.message
