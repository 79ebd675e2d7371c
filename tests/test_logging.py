"""Tests for structured logging."""

import json
import logging

from promptengineer.core.logging import LOGGER_NAME, configure_logging, get_logger


class TestStructuredLogger:
    """Test logger configuration."""

    def test_json_file_output(self, tmp_path):
        """Test JSON records with context fields written to a log file."""
        log_file = tmp_path / "logs" / "run.log"
        logger = configure_logging(level="info", json_output=True, log_file=str(log_file))

        logger.log_llm_call(
            model="gpt-3.5-turbo",
            prompt="p" * 300,
            response="Generated",
            tokens_input=10,
            tokens_output=3,
            latency_ms=12.5,
        )

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["message"] == "LLM call: gpt-3.5-turbo"
        assert record["event_type"] == "llm_call"
        assert record["prompt_length"] == 300
        assert record["prompt_preview"].endswith("...")
        assert record["tokens_output"] == 3

    def test_module_loggers_inherit_handlers(self, tmp_path):
        """Test that module loggers write through the configured handlers."""
        log_file = tmp_path / "run.log"
        configure_logging(level="DEBUG", log_file=str(log_file))

        logging.getLogger(f"{LOGGER_NAME}.core.requester").debug("child message")

        assert "child message" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, tmp_path):
        """Test that configuring twice does not duplicate handlers."""
        configure_logging(level="WARNING")
        logger = configure_logging(level="ERROR")
        assert logger is get_logger()
        assert len(logger.logger.handlers) == 1
        assert logger.logger.level == logging.ERROR

    def test_unconfigured_logger_leaves_handlers_alone(self):
        """Test that get_logger before configure_logging changes nothing."""
        package_logger = logging.getLogger(LOGGER_NAME)

        get_logger().log_llm_call(model="gpt-3.5-turbo", prompt="p", response="r")

        assert package_logger.propagate is True
        assert package_logger.handlers == []
        assert package_logger.level == logging.NOTSET
