from __future__ import annotations

import json

import structlog

from hsjwt.config import Settings
from hsjwt.logging_config import configure_from_settings, configure_logging


def test_json_logging_follows_settings(capsys):
    configure_from_settings(Settings(log_level="DEBUG", log_json=True))
    structlog.get_logger("hsjwt.test").debug("token_checked", alg="HS256")
    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "token_checked"
    assert event["alg"] == "HS256"
    assert event["level"] == "debug"
    assert "timestamp" in event


def test_level_filters_events(capsys):
    configure_logging("WARNING", json=True)
    logger = structlog.get_logger("hsjwt.test")
    logger.info("hidden")
    logger.warning("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_unknown_level_falls_back_to_info(capsys):
    configure_logging("chatty", json=True)
    structlog.get_logger("hsjwt.test").info("visible")
    assert "visible" in capsys.readouterr().err
