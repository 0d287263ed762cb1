import json
import logging

import pytest
import structlog

from levelgen import GenerationConfig, generate_level
from utils.logging_utils import setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_logging_emits_one_object_per_event(caplog):
    caplog.set_level(logging.INFO)
    setup_logging(logging.INFO, json=True)
    structlog.get_logger("levelgen.test").info("Level ready", rooms=3)
    payloads = [json.loads(r.getMessage()) for r in caplog.records if "Level ready" in r.getMessage()]
    assert payloads
    assert payloads[0]["event"] == "Level ready"
    assert payloads[0]["rooms"] == 3
    assert payloads[0]["level"] == "info"


def test_level_filtering(caplog):
    caplog.set_level(logging.DEBUG)
    setup_logging(logging.WARNING)
    log = structlog.get_logger("levelgen.test")
    log.info("Quiet event")
    log.warning("Loud event")
    messages = [r.getMessage() for r in caplog.records]
    assert not any("Quiet event" in m for m in messages)
    assert any("Loud event" in m for m in messages)


def test_generation_logs_through_configured_structlog(caplog):
    caplog.set_level(logging.INFO)
    setup_logging(logging.INFO, json=True)
    generate_level(GenerationConfig(seed=42))
    events = [
        json.loads(r.getMessage())["event"]
        for r in caplog.records
        if r.getMessage().startswith("{")
    ]
    assert "Starting level generation" in events
    assert "Level generation complete" in events
