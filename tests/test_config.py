import logging

from string_analyzer.config import Settings
from string_analyzer.limiter import create_limiter, default_limit
from string_analyzer.logging import build_logging_config


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("NL_REJECT_UNRECOGNIZED", "true")
    monkeypatch.setenv("RATE_LIMIT", "5")
    s = Settings()
    assert s.NL_REJECT_UNRECOGNIZED is True
    assert s.RATE_LIMIT == 5


def test_logging_config_levels():
    cfg = build_logging_config("debug", "warning")
    assert cfg["loggers"]["string_analyzer"]["level"] == "DEBUG"
    assert cfg["handlers"]["console"]["level"] == "WARNING"
    assert cfg["handlers"]["console"]["formatter"] in cfg["formatters"]


def test_limiter_respects_enabled_flag():
    assert create_limiter(enabled=False).enabled is False
    assert create_limiter(enabled=True).enabled is True
    assert default_limit().endswith("seconds")


def test_request_log_includes_filters(client, caplog):
    request_logger = logging.getLogger("string_analyzer.request")
    request_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="string_analyzer.request"):
            client.get("/strings", params={"word_count": 2})
    finally:
        request_logger.removeHandler(caplog.handler)
    messages = [r.getMessage() for r in caplog.records if r.name == "string_analyzer.request"]
    assert any("GET /strings -> 200" in m and "'word_count': '2'" in m for m in messages)
