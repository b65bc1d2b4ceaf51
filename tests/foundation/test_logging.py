import logging

import pytest

from mocma.foundation.logging import configure_mocma_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("mocma")
    root = logging.getLogger()
    saved = (list(logger.handlers), logger.level, logger.propagate, list(root.handlers))
    logger.handlers.clear()
    root.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    root.handlers[:] = saved[3]


def test_configure_attaches_single_handler(clean_logger):
    logger = configure_mocma_logging(level="debug")
    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    configure_mocma_logging(level=logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_configure_respects_existing_root_handlers(clean_logger):
    logging.getLogger().addHandler(logging.NullHandler())
    logger = configure_mocma_logging()
    assert logger.handlers == []


def test_unknown_level(clean_logger):
    with pytest.raises(ValueError):
        configure_mocma_logging(level="chatty")


def test_run_logs_progress(caplog):
    from mocma import MOCMA, DoubleSphereProblem, MOCMAConfig

    with caplog.at_level(logging.INFO, logger="mocma"):
        MOCMA(MOCMAConfig().mu(2).fixed()).run(DoubleSphereProblem(), ("max_steps", 2), seed=1)
    messages = [rec.getMessage() for rec in caplog.records]
    assert any("Starting MOCMA" in msg for msg in messages)
    assert any("2 generations" in msg for msg in messages)
