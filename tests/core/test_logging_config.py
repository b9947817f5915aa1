import json
import logging

from src.core.logging_config import LOG_FORMAT, SERVICE_NAME, CustomJsonFormatter, setup_logging


def test_formatter_adds_service_fields():
    formatter = CustomJsonFormatter(LOG_FORMAT)
    record = logging.LogRecord("src.services.results", logging.WARNING, __file__, 42, "slug collision", None, None)

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "slug collision"
    assert payload["level"] == "WARNING"
    assert payload["lineno"] == 42
    assert payload["service"] == SERVICE_NAME
    assert payload["timestamp"].endswith("+00:00")


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("debug")
        setup_logging("warning")
        json_handlers = [h for h in root.handlers if isinstance(h.formatter, CustomJsonFormatter)]
        assert len(json_handlers) == 1
        assert root.level == logging.WARNING
        assert logging.getLogger("fpdf").level == logging.WARNING
    finally:
        root.setLevel(level)
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
