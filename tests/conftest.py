"""Shared fixtures: keep structlog quiet so probe output stays clean."""

import logging
from unittest.mock import patch

import pytest
import structlog


@pytest.fixture(autouse=True)
def quiet_logging():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    with patch("wpupdates.cli.check.configure_logging"):
        yield
    structlog.reset_defaults()
