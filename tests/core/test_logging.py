from __future__ import annotations

import logging

from app.core.logging import ExtraFieldsFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.core.pdf_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="pdf_generation_succeeded",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_sorted_extra_fields() -> None:
    formatter = ExtraFieldsFormatter("%(levelname)s | %(name)s | %(message)s%(extra_fields)s")

    line = formatter.format(_record(size_bytes=2048, act_type="birth"))

    assert line == "INFO | app.core.pdf_service | pdf_generation_succeeded | act_type=birth size_bytes=2048"


def test_formatter_without_extra_fields_leaves_message_alone() -> None:
    formatter = ExtraFieldsFormatter("%(message)s%(extra_fields)s")

    assert formatter.format(_record()) == "pdf_generation_succeeded"


def test_logger_extra_reaches_formatter(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="app.core.pdf_assets")
    caplog.handler.setFormatter(ExtraFieldsFormatter("%(message)s%(extra_fields)s"))

    logging.getLogger("app.core.pdf_assets").warning("pdf_logo_missing", extra={"path": "logo.png"})

    assert "pdf_logo_missing | path=logo.png" in caplog.text
