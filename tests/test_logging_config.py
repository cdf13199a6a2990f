import logging

from payroll_system.common.logging_config import configure_logging, reset_logging


def test_configure_is_idempotent_and_reset_clears_handlers():
    reset_logging()
    logger = logging.getLogger("payroll_system")

    configure_logging(level="debug")
    configure_logging(level="error")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False

    reset_logging()
    assert logger.handlers == []
    assert logger.propagate is True
