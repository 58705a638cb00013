"""Shared fixtures for the ChangeSage test suite."""

import pytest
from loguru import logger


class LogCapture(list):
    """Loguru records collected by a test sink."""

    def at(self, level: str):
        return [record["message"] for record in self if record["level"].name == level]


@pytest.fixture
def log_records():
    records = LogCapture()
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)
