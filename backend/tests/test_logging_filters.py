"""Tests for log scrubbing."""

import logging

from app.security.logging_filters import SensitiveFilter, scrub


def test_scrub_redacts_tokens_and_coordinates() -> None:
    message = (
        'Authorization: Bearer abc.def-123 {"access_token": "s3cret", '
        '"lat": 51.5072, "lng": -0.1276}'
    )
    cleaned = scrub(message)

    assert "abc.def-123" not in cleaned
    assert "s3cret" not in cleaned
    assert "51.5072" not in cleaned
    assert "-0.1276" not in cleaned
    assert '"lat": **REDACTED**' in cleaned


def test_scrub_leaves_prices_alone() -> None:
    assert scrub("Quote total 214.20 for man-and-van") == (
        "Quote total 214.20 for man-and-van"
    )


def test_filter_rewrites_record_message() -> None:
    record = logging.LogRecord(
        name="app",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="pickup latitude=52.2053 longitude=0.1218",
        args=(),
        exc_info=None,
    )

    assert SensitiveFilter().filter(record) is True
    assert record.getMessage() == (
        "pickup latitude=**REDACTED** longitude=**REDACTED**"
    )
