import structlog

from household_registry.logging_config import (
    LogContext,
    _add_log_level,
    bind_context,
    clear_context,
    get_console_processors,
    get_json_processors,
    get_logger,
)


class TestProcessors:
    def test_console_renders_last(self):
        processors = get_console_processors()

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renders_last(self):
        processors = get_json_processors()

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_add_log_level_normalises_warn(self):
        event = _add_log_level(None, "warn", {"event": "x"})

        assert event["level"] == "WARNING"


class TestContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_log_context_binds_temporarily(self):
        bind_context(request="outer")

        with LogContext(export_filename="registry.csv"):
            assert structlog.contextvars.get_contextvars() == {
                "request": "outer",
                "export_filename": "registry.csv",
            }

        assert structlog.contextvars.get_contextvars() == {"request": "outer"}

    def test_logger_emits_event(self, capsys, caplog):
        get_logger("household_registry.test").info("logging_smoke_test", value=1)

        all_output = capsys.readouterr().out + caplog.text
        assert "logging_smoke_test" in all_output
