"""Root pytest configuration for all tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_sitepages_logger():
    """Drop handlers installed by CLI invocations.

    The CLI attaches a stderr handler bound to the stream captured by the
    test runner, which is closed once the invocation returns.
    """
    yield
    app_logger = logging.getLogger("sitepages")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
