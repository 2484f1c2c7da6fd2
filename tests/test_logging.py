# Area: Shared Tests
"""Tests for error formatting, logging setup and protocol tracing."""

import io
import json
import logging

import pytest

from arena_engine._shared.logging_config import log_engine_error, setup_logging
from arena_engine._shared.protocol_logger import (
    GREEN,
    GREY,
    ProtocolLogger,
    RESET,
)
from arena_engine.errors import (
    EngineError,
    MissingProcessorError,
    SetupAbortedError,
    SetupError,
    TransportError,
)


@pytest.fixture
def restore_logger():
    pkg_logger = logging.getLogger("arena_engine")
    handlers = list(pkg_logger.handlers)
    propagate = pkg_logger.propagate
    level = pkg_logger.level
    yield pkg_logger
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        pkg_logger.addHandler(handler)
    pkg_logger.propagate = propagate
    pkg_logger.setLevel(level)


class TestErrors:
    """Tests for the error hierarchy."""

    def test_hierarchy(self):
        assert issubclass(TransportError, EngineError)
        assert issubclass(SetupAbortedError, SetupError)
        assert issubclass(MissingProcessorError, EngineError)

    def test_missing_processor_message(self):
        error = MissingProcessorError("tictactoe")
        assert "tictactoe" in str(error)
        assert error.phase == "SETUP_DONE"

    def test_format_error_log(self):
        error = SetupAbortedError(
            "Setup aborted: Input stream closed",
            phase="PARSING_SETTINGS",
            details={"players": [0, 1]},
        )
        block = error.format_error_log()
        assert "SETUP_ABORTED" in block
        assert "PARSING_SETTINGS" in block
        assert "Input stream closed" in block
        assert '"players"' in block

    def test_format_without_phase_or_details(self):
        block = TransportError("closed").format_error_log()
        assert "TRANSPORT_FAILURE" in block
        assert "Phase:" not in block
        assert "DETAILS" not in block


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler_writes_json(self, tmp_path, restore_logger):
        log_path = tmp_path / "logs" / "engine.log"
        terminal = io.StringIO()
        setup_logging(str(log_path), level=logging.INFO, stream=terminal)

        logging.getLogger("arena_engine.engine").info("hello engine")
        for handler in restore_logger.handlers:
            handler.flush()

        record = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
        assert record["message"] == "hello engine"
        assert record["logger"] == "arena_engine.engine"
        assert "hello engine" in terminal.getvalue()
        assert restore_logger.propagate is False

    def test_no_file_logging(self, restore_logger):
        setup_logging(None, stream=io.StringIO())
        assert all(
            not isinstance(handler, logging.FileHandler)
            for handler in restore_logger.handlers
        )

    def test_repeated_setup_does_not_duplicate_handlers(self, restore_logger):
        setup_logging(None, stream=io.StringIO())
        setup_logging(None, stream=io.StringIO())
        assert len(restore_logger.handlers) == 1

    def test_log_engine_error_prints_block(self, capsys, restore_logger):
        setup_logging(None, stream=io.StringIO())
        log_engine_error(TransportError("Input stream closed"))
        assert "TRANSPORT_FAILURE" in capsys.readouterr().err


class TestProtocolLogger:
    """Tests for protocol line tracing."""

    def test_disabled_prints_nothing(self):
        stream = io.StringIO()
        trace = ProtocolLogger(enabled=False, stream=stream)
        trace.log_received("initialize")
        trace.log_sent("ok")
        assert stream.getvalue() == ""

    def test_received_and_sent(self):
        stream = io.StringIO()
        trace = ProtocolLogger(enabled=True, stream=stream)
        trace.set_phase("AWAIT_INITIALIZE")

        trace.log_received("initialize")
        trace.log_sent("ok")

        lines = stream.getvalue().splitlines()
        assert lines[0].startswith(GREEN) and lines[0].endswith(RESET)
        assert "RECEIVED" in lines[0] and "INITIALIZE" in lines[0]
        assert "AWAIT_INITIALIZE" in lines[0]
        assert "SENT" in lines[1] and "ACK" in lines[1]

    def test_result_details_display(self):
        stream = io.StringIO()
        trace = ProtocolLogger(enabled=True, stream=stream)
        trace.log_sent('{"winner":"1","score":3}')
        assert "RESULT-DETAILS" in stream.getvalue()

    def test_discarded_and_long_lines_shortened(self):
        stream = io.StringIO()
        trace = ProtocolLogger(enabled=True, stream=stream)
        trace.log_discarded("x" * 200, "details")
        output = stream.getvalue()
        assert output.startswith(GREY)
        assert "DISCARDED" in output
        assert "..." in output
        assert "x" * 200 not in output
