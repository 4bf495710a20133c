import logging
import logging.handlers
import re
from pathlib import Path

from smartq.core.config import settings
from smartq.core.correlation import CorrelationIdFilter


class SensitiveDataFilter(logging.Filter):
    """
    Filter to mask sensitive data in log records.
    """
    def __init__(self, name=""):
        super().__init__(name)
        self.patterns = [
            (r'(password=)[\'"]?([^\'"\s,]+)[\'"]?', r'\1***MASKED***'),
            (r'(access_token=)[\'"]?([^\'"\s,]+)[\'"]?', r'\1***MASKED***'),
            (r'(token=)[\'"]?([^\'"\s,]+)[\'"]?', r'\1***MASKED***'),
            (r'(Bearer )([A-Za-z0-9\-_\.]+)', r'\1***MASKED***'),
        ]

    def filter(self, record):
        if not isinstance(record.msg, str):
            return True

        msg = record.msg
        for pattern, replacement in self.patterns:
            msg = re.sub(pattern, replacement, msg, flags=re.IGNORECASE)

        record.msg = msg
        return True


def setup_logging(log_file_path: str | None = None) -> Path:
    """
    Configures the logging for the application.
    Writes logs to stdout and to a rotating file.
    """
    log_file = Path(log_file_path or settings.LOG_FILE_PATH)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
    )

    sensitive_filter = SensitiveDataFilter()
    correlation_filter = CorrelationIdFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(sensitive_filter)
    console_handler.addFilter(correlation_filter)

    # Rotates when file size reaches 10MB, keeps 5 backup files
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    file_handler.addFilter(sensitive_filter)
    file_handler.addFilter(correlation_filter)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # Remove existing handlers to avoid duplicates if called multiple times
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    return log_file
