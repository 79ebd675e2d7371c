"""Structured logging for Prompt Engineer."""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "promptengineer"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _make_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter(JSON_FORMAT)
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


class StructuredLogger:
    """
    Structured logger with JSON output support and context tracking.

    Owns the handlers of the ``promptengineer`` logger, so every module
    logging through ``logging.getLogger(__name__)`` inherits its output.
    """

    def __init__(
        self,
        name: str = LOGGER_NAME,
        level: LogLevel = LogLevel.WARNING,
        json_output: bool = False,
        log_file: Optional[Path] = None,
        attach_handlers: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Log level
            json_output: If True, output JSON-formatted logs
            log_file: Optional file path to write logs to
            attach_handlers: If False, leave the logger's level, handlers
                and propagation to whoever configured logging
        """
        self.name = name
        self.level = level
        self.json_output = json_output
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        if not attach_handlers:
            return

        self.logger.setLevel(getattr(logging, level.value))
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

        formatter = _make_formatter(json_output)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.value))
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(getattr(logging, level.value))
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _log_with_context(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        if context:
            kwargs.update(context)
        self.logger.log(level, message, extra=kwargs or None)

    def info(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log_with_context(logging.INFO, message, context, **kwargs)

    def log_llm_call(
        self,
        model: str,
        prompt: str,
        response: str,
        tokens_input: Optional[int] = None,
        tokens_output: Optional[int] = None,
        latency_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log a completion call with structured metadata.

        Args:
            model: Model name
            prompt: User message sent (truncated in logs)
            response: Response text (truncated in logs)
            tokens_input: Number of input tokens
            tokens_output: Number of output tokens
            latency_ms: Request latency in milliseconds
            **kwargs: Additional metadata
        """
        prompt_preview = prompt[:200] + "..." if len(prompt) > 200 else prompt
        response_preview = response[:200] + "..." if len(response) > 200 else response

        context = {
            "event_type": "llm_call",
            "model": model,
            "prompt_length": len(prompt),
            "response_length": len(response),
            "prompt_preview": prompt_preview,
            "response_preview": response_preview,
        }
        if tokens_input is not None:
            context["tokens_input"] = tokens_input
        if tokens_output is not None:
            context["tokens_output"] = tokens_output
        if latency_ms is not None:
            context["latency_ms"] = latency_ms
        context.update(kwargs)

        self.info(f"LLM call: {model}", context=context)


_default_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """
    Get the structured logger.

    Before ``configure_logging`` is called this wraps the ``promptengineer``
    logger without changing its handlers, so an embedding application's
    logging setup is left alone.
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = StructuredLogger(attach_handlers=False)
    return _default_logger


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> StructuredLogger:
    """
    Configure global logging settings, replacing any previous handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON-formatted logs
        log_file: Optional file path to write logs to

    Returns:
        Configured StructuredLogger instance
    """
    global _default_logger
    _default_logger = StructuredLogger(
        level=LogLevel[level.upper()],
        json_output=json_output,
        log_file=Path(log_file) if log_file else None,
    )
    return _default_logger
