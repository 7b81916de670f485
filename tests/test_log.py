import json
import logging

from loguru import logger
from watchcursor.log import QUIET_LOGGERS, setup_logging


def test_stdlib_records_are_forwarded_to_loguru() -> None:
    setup_logging("debug")
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")

    try:
        logging.getLogger("uvicorn.error").warning("cursor endpoint started")
        logging.getLogger("httpx").info("HTTP Request: GET /watch/v1")
    finally:
        logger.remove(handler_id)

    assert messages == ["WARNING cursor endpoint started\n"]


def test_http_layers_are_quieted() -> None:
    setup_logging("info")

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_json_logs(capsys) -> None:
    setup_logging("info", json_logs=True)

    logger.info("rejecting cursor {}", "abc")

    record = json.loads(capsys.readouterr().err.splitlines()[-1])
    assert record["record"]["message"] == "rejecting cursor abc"
