import logging

import pytest

from py_unitcalc import basicConfig
from py_unitcalc.logger import logger
from py_unitcalc.tables import build_tables

logger.setLevel(logging.DEBUG)


@pytest.fixture(scope="session")
def tables():
    return build_tables()


@pytest.fixture
def restore_default_config():
    """Rebuild the built-in default tables after a test reconfigures them."""
    yield
    basicConfig()
    logger.setLevel(logging.DEBUG)
