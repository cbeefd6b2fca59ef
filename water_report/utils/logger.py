"""
Logging for extraction runs.

ExtractionLogger wraps a named stdlib logger:
- Console output on stderr (stdout is reserved for JSON results)
- Optional log file under the configured log directory, always at DEBUG
- Keyword context appended to messages as [key=value ...]
- Warnings and errors kept in memory for the end-of-run summary
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

# pdfplumber delegates to pdfminer, which warns on every malformed colour or font
NOISY_PDF_LOGGERS = ("pdfminer", "pdfminer.pdfinterp", "pdfminer.pdfpage", "pdfminer.converter", "pdfminer.pdffont")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MillisecondsFormatter(logging.Formatter):
    """Timestamps as 2024-05-01 12:00:00,123 regardless of datefmt."""

    default_msec_format = "%s,%03d"

    def formatTime(self, record, datefmt=None):  # noqa: N802 - logging.Formatter API
        stamp = time.strftime(datefmt or DATE_FORMAT, self.converter(record.created))
        return self.default_msec_format % (stamp, record.msecs)


def _with_context(message: str, context: dict) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(MillisecondsFormatter(LOG_FORMAT))
    return handler


class ExtractionLogger:
    """Structured logger with warning/error tracking for a batch of reports."""

    def __init__(
        self,
        name: str = "water_report",
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
    ):
        """
        Args:
            name: Name of the underlying logging.Logger
            log_level: Console level name (DEBUG, INFO, WARNING, ERROR)
            log_file: File name to also log to; no file logging when omitted
            log_dir: Directory for log_file; defaults to WATER_REPORT_LOG_DIR
        """
        level = getattr(logging, log_level.upper())
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if log_file else level)
        # Own handlers only; re-creating the logger must not stack output
        self.logger.propagate = False
        self.logger.handlers.clear()
        self.logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level))

        self.log_path = None
        if log_file:
            if log_dir is None:
                from ..config import get_log_dir

                log_dir = get_log_dir()
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_path = log_dir / log_file
            self.logger.addHandler(_make_handler(logging.FileHandler(self.log_path), logging.DEBUG))
            self.info(f"Logging to file: {self.log_path}")

        for pdf_logger in NOISY_PDF_LOGGERS:
            logging.getLogger(pdf_logger).setLevel(logging.ERROR)

        self.errors = []
        self.warnings = []

    def _track(self, bucket: list, message: str, context: dict, exception: Optional[Exception] = None):
        entry = {"message": message, "timestamp": datetime.now().isoformat(), "data": context}
        if bucket is self.errors:
            entry["exception"] = str(exception) if exception else None
        bucket.append(entry)

    def debug(self, message: str, **context):
        self.logger.debug(_with_context(message, context), stacklevel=2)

    def info(self, message: str, **context):
        self.logger.info(_with_context(message, context), stacklevel=2)

    def warning(self, message: str, **context):
        """Log a warning and keep it for the run summary."""
        message = _with_context(message, context)
        self.logger.warning(message, stacklevel=2)
        self._track(self.warnings, message, context)

    def error(self, message: str, exception: Optional[Exception] = None, **context):
        """Log an error (with traceback when an exception is given) and keep it for the run summary."""
        if exception is not None:
            message = f"{message} | {type(exception).__name__}: {exception}"
        message = _with_context(message, context)
        self.logger.error(message, exc_info=exception, stacklevel=2)
        self._track(self.errors, message, context, exception)

    @contextmanager
    def time_document(self, file_name: str, operation: str = "extraction"):
        """
        Time one document and log its outcome; exceptions are logged and re-raised.

        Usage:
            with logger.time_document("ccr_2023.pdf"):
                result = parser.parse_pdf(file_path="ccr_2023.pdf")
        """
        started = time.perf_counter()
        self.debug(f"Starting {operation}", file_name=file_name)
        try:
            yield
        except Exception as e:
            elapsed = round(time.perf_counter() - started, 2)
            self.error(f"Failed {operation}", exception=e, file_name=file_name, duration_seconds=elapsed)
            raise
        elapsed = round(time.perf_counter() - started, 2)
        self.info(f"Completed {operation}", file_name=file_name, duration_seconds=elapsed)

    def get_error_summary(self) -> dict:
        return {
            "total_errors": len(self.errors),
            "total_warnings": len(self.warnings),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    def clear_tracking(self):
        self.errors = []
        self.warnings = []


class ExtractionRunContext:
    """
    Logs the start and the success/failure tally of a multi-document run.

    Usage:
        with ExtractionRunContext(logger, num_documents=len(paths)) as run:
            ...
            run.increment_success()  # or run.increment_failure()
    """

    def __init__(self, logger: ExtractionLogger, num_documents: int):
        self.logger = logger
        self.num_documents = num_documents
        self.succeeded = 0
        self.failed = 0
        self._started = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"Extraction started - {self.num_documents} document(s)")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.info(
            "Extraction completed",
            succeeded=self.succeeded,
            failed=self.failed,
            duration_seconds=round(time.perf_counter() - self._started, 2),
        )
        return False

    def increment_success(self):
        self.succeeded += 1

    def increment_failure(self):
        self.failed += 1
