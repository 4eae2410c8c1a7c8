"""
This file contains fixtures for the tests in the connection_string package.
Functions:
- pytest_addoption: Register the enable_logging ini option.
- pytest_configure: Enable package logging when enable_logging is set.
- reset_settings: Restore global settings around every test.
- cleanup_logger: Disable the package logger and close its handlers.
"""

import pytest

from connection_string import helpers
from connection_string.logging import logger, setup_logging


def pytest_addoption(parser):
    parser.addini('enable_logging', 'Enable connection_string DEBUG logging to stdout', default='false')


def pytest_configure(config):
    enable_log = config.getini('enable_logging')
    if enable_log and str(enable_log).lower() in ('true', '1', 'yes'):
        setup_logging(output='stdout')
        print("[pytest] connection_string logging enabled")


@pytest.fixture(autouse=True)
def reset_settings():
    """Restore global settings before and after each test"""
    helpers.reset_settings()
    yield
    helpers.reset_settings()


@pytest.fixture
def cleanup_logger():
    """Disable the logger and drop its handlers before and after each test"""
    logger._reset()
    yield logger
    logger._reset()
