"""Pytest configuration and fixtures."""

import logging

import pytest

from matchtree.config import MatchtreeConfig, set_config


@pytest.fixture(autouse=True)
def quiet_config(monkeypatch):
    """Run every test with a known config that writes no reports."""
    monkeypatch.delenv("MATCHTREE_CONFIG", raising=False)
    previous = set_config(MatchtreeConfig(sink="none"))
    yield
    set_config(previous)


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Drop handlers added to matchtree loggers so tests stay independent."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("matchtree"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
