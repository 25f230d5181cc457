from datetime import datetime, timezone

import pytest

from logstash_obs import Logger
from logstash_obs import logging as obs_logging

FIXED_NOW = datetime(2018, 6, 5, 18, 20, 42, 345000, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch):
    for key in ("APP_NAME", "NODE_ENV", "HOST"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("APP_NAME", "application-name")


@pytest.fixture
def logger() -> Logger:
    return Logger(clock=lambda: FIXED_NOW)


@pytest.fixture
def restore_global_logger():
    original = obs_logging.get_logger()
    yield
    obs_logging._set_logger(original)
