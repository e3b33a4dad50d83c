import logging

import pytest

from swagger_extract.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() calls made by CLI invocations."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
