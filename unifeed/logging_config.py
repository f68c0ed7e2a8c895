"""Structured logging configuration for unifeed."""

import json
import logging
import sys
from datetime import UTC, datetime

LOGGER_PREFIX = "unifeed"

COMPONENTS = (
    "xml_parser",
    "rss_parser",
    "atom_parser",
    "json_feed_parser",
    "feed_parser",
)

# LogRecord attributes that are not caller-supplied context
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ExecutionLogger:
    """Logger with execution context and structured logging."""

    def __init__(self, execution_id: str, component: str = "feed_parser"):
        """Initialize execution logger.

        Args:
            execution_id: Unique identifier for this parser instance
            component: Component name (e.g., 'xml_parser', 'rss_parser')
        """
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"{LOGGER_PREFIX}.{component}")

    def _log_with_context(self, level: int, message: str, **kwargs) -> None:
        """Log message with execution context."""
        if not self.logger.isEnabledFor(level):
            return
        extra = {
            "execution_id": self.execution_id,
            "component": self.component,
            **kwargs,
        }
        self.logger.log(level, message, extra=extra)

    def info(self, message: str, **kwargs) -> None:
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log_with_context(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def log_parse_failure(self, error: Exception, **kwargs) -> None:
        """Log a parse failure with the error kind."""
        self.warning(
            f"{self.component} failed: {error}",
            error_kind=type(error).__name__,
            error=str(error),
            **kwargs,
        )


def set_log_level(log_level: str) -> None:
    """Set the level of the package logger and every component logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    level = getattr(logging, log_level.upper())
    for logger_name in (LOGGER_PREFIX,) + tuple(
        f"{LOGGER_PREFIX}.{component}" for component in COMPONENTS
    ):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


def setup_structured_logging(log_level: str = "INFO") -> None:
    """Setup structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    set_log_level(log_level)


def create_execution_logger(
    component: str,
    execution_id: str | None = None,
    log_level: str | None = None,
) -> ExecutionLogger:
    """Create an execution logger for a component.

    Args:
        component: Component name
        execution_id: Optional execution ID (will generate one if not provided)
        log_level: Optional level applied to the unifeed loggers; None leaves
            them as configured by the host application

    Returns:
        ExecutionLogger instance
    """
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    if log_level:
        set_log_level(log_level)

    return ExecutionLogger(execution_id, component)
