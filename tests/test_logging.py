# tests/test_logging.py
import json

import pytest

from plume_cli.config import Settings, get_settings
from plume_cli.log import configure_logging, get_logger


@pytest.fixture
def restore_logging():
    yield
    configure_logging(get_settings())


class TestLogging:
    def test_json_events_go_to_stderr(self, capsys, restore_logging):
        configure_logging(Settings(log_level="INFO", log_format="json"))
        get_logger("plume.test").info("analysis_completed", ai_probability=42.5)

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event["event_type"] == "analysis_completed"
        assert event["logger_name"] == "plume.test"
        assert event["level"] == "info"
        assert event["ai_probability"] == 42.5

    def test_level_filters_events(self, capsys, restore_logging):
        configure_logging(Settings(log_level="WARNING", log_format="json"))
        get_logger("plume.test").info("hidden")
        assert capsys.readouterr().err == ""

    def test_module_loggers_follow_reconfiguration(self, capsys, restore_logging, engine, ai_text):
        configure_logging(Settings(log_level="INFO", log_format="json"))
        engine.analyze(ai_text)
        events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
        assert "analysis_completed" in [e["event_type"] for e in events]
