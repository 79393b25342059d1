import logging

import pytest

from qrgen.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_qrgen_logging():
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
