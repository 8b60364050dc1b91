"""Tests for logging utilities."""
import io
import logging
import logging.handlers

import pytest

from civic_triage.logging_utils import SafeStreamHandler, configure_logging


def _record(msg="issue enriched"):
    return logging.LogRecord(
        name="civic_triage.test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSafeStreamHandler:
    """Tests for SafeStreamHandler exception handling."""

    @pytest.mark.parametrize("error", [
        BrokenPipeError("stdout closed"),
        ValueError("I/O operation on closed file"),
    ])
    def test_swallows_closed_stream_errors(self, monkeypatch, error):
        """Closed pipes and files must not crash the pipeline."""
        def failing_emit(self, record):
            raise error

        monkeypatch.setattr(logging.StreamHandler, "emit", failing_emit)
        handler = SafeStreamHandler(stream=io.StringIO())

        handler.emit(_record())

    def test_reraises_other_exceptions(self, monkeypatch):
        def failing_emit(self, record):
            raise RuntimeError("unexpected error")

        monkeypatch.setattr(logging.StreamHandler, "emit", failing_emit)
        handler = SafeStreamHandler(stream=io.StringIO())

        with pytest.raises(RuntimeError, match="unexpected error"):
            handler.emit(_record())

    def test_normal_logging_works(self):
        stream = io.StringIO()
        handler = SafeStreamHandler(stream=stream)
        handler.setFormatter(logging.Formatter("%(message)s"))

        handler.emit(_record("category=water priority=88"))

        assert "category=water priority=88" in stream.getvalue()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def setup_method(self):
        """Start each test from a bare root logger."""
        root = logging.getLogger()
        self._saved_handlers = root.handlers[:]
        self._saved_level = root.level
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        root.setLevel(logging.WARNING)

    def teardown_method(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.close()
        for handler in self._saved_handlers:
            root.addHandler(handler)
        root.setLevel(self._saved_level)

    def test_adds_safe_stream_handler(self):
        root = logging.getLogger()

        configure_logging()

        assert any(isinstance(h, SafeStreamHandler) for h in root.handlers)

    def test_idempotent(self):
        root = logging.getLogger()

        configure_logging()
        configure_logging()
        configure_logging()

        safe_handlers = [h for h in root.handlers if isinstance(h, SafeStreamHandler)]
        assert len(safe_handlers) == 1

    def test_default_level_is_info(self):
        configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_does_not_raise_threshold_of_more_verbose_root(self):
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        configure_logging(level=logging.INFO)

        assert root.level == logging.DEBUG

    def test_accepts_custom_level(self):
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_rotating_file_handler(self, tmp_path):
        log_file = tmp_path / "civic.log"
        root = logging.getLogger()

        configure_logging(log_file=str(log_file))
        configure_logging(log_file=str(log_file))

        file_handlers = [
            h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 10 * 1024 * 1024
        assert file_handlers[0].backupCount == 3

        logging.getLogger("civic_triage.test").warning("written to file")
        file_handlers[0].flush()
        assert "written to file" in log_file.read_text()
