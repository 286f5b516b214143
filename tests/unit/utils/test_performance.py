"""Tests for performance monitoring utilities."""

import time

import pytest
from loguru import logger

from langvec.utils.performance import timed, timer


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}:{message}")
    yield messages
    logger.remove(handler_id)


class TestTimer:
    """Tests for timer context manager."""

    def test_timer_logs_operation(self, log_messages):
        with timer("Test operation"):
            time.sleep(0.01)  # 10ms

        assert any("Test operation took" in m for m in log_messages)

    def test_timer_with_threshold(self, log_messages):
        """Timer stays quiet below the threshold."""
        with timer("Fast operation", threshold_ms=10_000):
            pass

        assert not any("Fast operation" in m for m in log_messages)

    def test_timer_exception_handling(self, log_messages):
        """Timer still logs and re-raises."""
        with pytest.raises(ValueError):
            with timer("Failing operation"):
                raise ValueError("Test error")

        assert any("Failing operation" in m for m in log_messages)

    def test_timer_log_level(self, log_messages):
        with timer("Warning operation", log_level="WARNING"):
            pass

        assert any(m.startswith("WARNING:Warning operation") for m in log_messages)

    def test_timer_reads_threshold_from_settings(self, log_messages, monkeypatch):
        from langvec.config import settings as settings_module

        monkeypatch.setattr(
            settings_module,
            "settings",
            settings_module.Settings(SEARCH_TIMING_THRESHOLD_MS=10_000),
        )

        with timer("Configured operation", threshold_ms=None):
            pass

        assert not any("Configured operation" in m for m in log_messages)

    def test_slow_operation_reported_in_seconds(self, log_messages, mocker):
        clock = mocker.patch("langvec.utils.performance.time")
        clock.perf_counter.side_effect = [0.0, 1.5]

        with timer("Slow operation"):
            pass

        assert any(m.startswith("INFO:Slow operation took 1.50s") for m in log_messages)


class TestTimed:
    """Tests for timed decorator."""

    def test_timed_preserves_result(self):
        @timed(threshold_ms=0)
        def fast_function():
            return "result"

        assert fast_function() == "result"
        assert fast_function.__name__ == "fast_function"

    def test_timed_custom_operation_name(self, log_messages):
        @timed(operation="Custom Operation", threshold_ms=0)
        def my_function():
            return 42

        assert my_function() == 42
        assert any("Custom Operation took" in m for m in log_messages)

    def test_timed_uses_settings_threshold(self, log_messages, monkeypatch):
        from langvec.config import settings as settings_module

        monkeypatch.setattr(
            settings_module,
            "settings",
            settings_module.Settings(SEARCH_TIMING_THRESHOLD_MS=10_000),
        )

        @timed(operation="Quiet Operation")
        def quiet():
            return None

        quiet()
        assert not any("Quiet Operation" in m for m in log_messages)

    def test_timed_propagates_exceptions(self):
        @timed(threshold_ms=0)
        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            failing()
