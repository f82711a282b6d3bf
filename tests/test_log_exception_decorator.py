"""
Tests for the log_exception decorator used to guard listeners.

Tests cover:
- Exceptions are logged and swallowed with a default return value
- Parameter binding in the log message
- Prefix formatting with parameter substitution
- Guarded listeners keep a dispatch pass running
"""

from listenable.events import Event, EventDispatcher
from listenable.logger import log_exception


class TestBasicExceptionLogging:
    """Test basic exception logging functionality."""

    def test_function_with_prefix(self, caplog):
        """Test function logs exception with prefix and returns None."""

        @log_exception("TickListener")
        def on_tick(event):
            raise ValueError("Test error from listener")

        result = on_tick("tick")

        assert result is None
        assert "TickListener: ValueError: Test error from listener" in caplog.text
        assert "ERROR" in caplog.text

    def test_function_without_prefix(self, caplog):
        @log_exception()
        def on_tick(event):
            raise RuntimeError("Error without prefix")

        assert on_tick("tick") is None
        assert "RuntimeError: Error without prefix" in caplog.text

    def test_default_return(self, caplog):
        @log_exception("Guarded", default_return=False)
        def on_tick(event):
            raise RuntimeError("boom")

        assert on_tick("tick") is False

    def test_successful_execution_no_log(self, caplog):
        @log_exception("SuccessfulListener")
        def on_tick(event):
            return True

        assert on_tick("tick") is True
        assert caplog.text == ""


class TestParameterFormatting:
    """Test argument binding and prefix substitution."""

    def test_arguments_in_message(self, caplog):
        @log_exception("Listener")
        def on_score(event, points=5):
            raise ValueError("bad score")

        on_score("score")

        assert "[event='score', points=5] Listener: ValueError: bad score" in caplog.text

    def test_prefix_substitution(self, caplog):
        @log_exception("listener for {event.type}")
        def on_score(event):
            raise ValueError("bad score")

        on_score(Event(type="score"))

        assert "listener for score: ValueError: bad score" in caplog.text

    def test_prefix_with_missing_parameter(self, caplog):
        @log_exception("listener for {missing}")
        def on_score(event):
            raise ValueError("bad score")

        on_score("score")

        assert "Failed to format prefix" in caplog.text
        assert "listener for {missing}: ValueError: bad score" in caplog.text


class TestGuardedDispatch:
    """Test guarded listeners inside a dispatch pass."""

    def test_guarded_listener_does_not_abort_dispatch(self, caplog):
        dispatcher = EventDispatcher()
        calls = []

        @log_exception("go listener")
        def failing_listener(event):
            calls.append("failing")
            raise ValueError("Test error")

        def successful_listener(event):
            calls.append("successful")
            return True

        dispatcher.add_event_listener("go", failing_listener)
        dispatcher.add_event_listener("go", successful_listener)

        assert dispatcher.dispatch_event("go") is True
        assert calls == ["failing", "successful"]
        assert "go listener: ValueError: Test error" in caplog.text
