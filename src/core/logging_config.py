import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "ai-readiness-check"
LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(module)s %(lineno)d %(message)s"

# Third-party loggers that flood DEBUG output while rendering or uploading PDFs
NOISY_LOGGERS = ("fontTools", "fpdf", "PIL", "botocore", "boto3", "s3transfer", "urllib3")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON log lines with a UTC ISO timestamp and the service name."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["module"] = record.module
        log_record["lineno"] = record.lineno
        log_record["service"] = SERVICE_NAME


def _json_handler(root_logger: logging.Logger):
    for handler in root_logger.handlers:
        if isinstance(handler.formatter, CustomJsonFormatter):
            return handler
    return None


def setup_logging(log_level_str: str = "INFO"):
    """
    Sends structured JSON logs to stdout.

    Calling it again only changes the level; no second handler is added.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if _json_handler(root_logger) is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(CustomJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    root_logger.info(f"JSON logging configured at level {logging.getLevelName(log_level)}")
