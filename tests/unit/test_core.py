"""
Unit tests for core helpers: utils, exceptions, performance and log masking.
"""

import logging
from datetime import date

import pytest

from core.exceptions import (
    DeliveryException,
    DigestException,
    MailgunAPIException,
    NetworkException,
    SourceUnavailableException,
)
from core.logger import SensitiveDataFilter
from core.performance import PerformanceMonitor
from core.utils import collapse_whitespace, get_today, parse_number, release_window


class TestUtils:
    def test_release_window(self):
        assert release_window(date(2024, 3, 10), 6) == ("2024-03-04", "2024-03-10")

    def test_release_window_zero_days(self):
        assert release_window(date(2024, 1, 1), 0) == ("2024-01-01", "2024-01-01")

    def test_release_window_crosses_year(self):
        assert release_window(date(2024, 1, 3), 6) == ("2023-12-28", "2024-01-03")

    def test_get_today(self):
        assert isinstance(get_today("Asia/Seoul"), date)

    @pytest.mark.parametrize(
        "raw,as_int,expected",
        [("8.1", False, 8.1), (" 74 ", True, 74), ("1,234", True, 1234), ("74.0", True, 74)],
    )
    def test_parse_number(self, raw, as_int, expected):
        assert parse_number(raw, as_int=as_int) == expected

    @pytest.mark.parametrize("raw", [None, "", "  ", "n/a", "nan", "inf"])
    def test_parse_number_rejects(self, raw):
        with pytest.raises(ValueError):
            parse_number(raw)

    def test_collapse_whitespace(self):
        assert collapse_whitespace("a \n\t b") == "a b"


class TestExceptions:
    def test_str_with_details(self):
        e = NetworkException("Status code error: 503", {"status": 503})
        assert str(e) == "Status code error: 503 (status=503)"

    def test_str_without_details(self):
        assert str(DigestException("boom")) == "boom"

    def test_hierarchy(self):
        assert issubclass(NetworkException, SourceUnavailableException)
        assert issubclass(MailgunAPIException, DeliveryException)
        assert not issubclass(DeliveryException, SourceUnavailableException)


class TestPerformanceMonitor:
    def test_measure_records_stage(self):
        monitor = PerformanceMonitor()
        with monitor.measure("extract", {"shape": "rating"}):
            pass

        assert len(monitor.stages) == 1
        assert monitor.stages[0]["stage"] == "extract"
        assert monitor.stages[0]["success"] is True
        assert monitor.total_ms() >= 0

    def test_measure_reraises(self):
        monitor = PerformanceMonitor()
        with pytest.raises(NetworkException):
            with monitor.measure("fetch"):
                raise NetworkException("down")

        assert monitor.stages[0]["success"] is False

    def test_monitors_are_independent(self):
        first = PerformanceMonitor()
        with first.measure("fetch"):
            pass
        assert PerformanceMonitor().stages == []


class TestSensitiveDataFilter:
    def _filtered(self, msg: str) -> str:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, None, None)
        SensitiveDataFilter().filter(record)
        return record.msg

    def test_masks_email(self):
        assert "justin@example.com" not in self._filtered("sending to justin@example.com")

    def test_masks_sandbox_id(self):
        msg = self._filtered("posting to sandbox0123456789abcdef0123456789abcdef.mailgun.org")
        assert "0123456789abcdef0123456789abcdef" not in msg
        assert "mailgun.org" in msg

    def test_plain_message_untouched(self):
        assert self._filtered("[SCRAPER] Run started") == "[SCRAPER] Run started"

    def test_masks_mailgun_key(self):
        msg = self._filtered("auth failed for key-0123456789abcdefABCDEF0123")
        assert msg == "auth failed for key-***MASKED***"

    def test_masks_key_assignment(self):
        msg = self._filtered("loaded MAILGUN_API_KEY=abcdefghijklmnopqrstuvwxyz")
        assert msg == "loaded MAILGUN_API_KEY=***MASKED***"

    def test_masks_recipient_in_rendered_form(self):
        msg = self._filtered("to=Justin <justin.doe+imdb@example.co.uk>")
        assert msg == "to=Justin <***EMAIL***>"

    def test_masks_string_args(self):
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "sending %s via %s (%d)", ("me@example.com", "mailgun", 3), None
        )
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "sending ***EMAIL*** via mailgun (3)"

    def test_short_key_like_text_untouched(self):
        assert self._filtered("monkey-patched") == "monkey-patched"
