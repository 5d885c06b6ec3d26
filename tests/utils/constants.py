# tests/utils/constants.py

import logging
from pathlib import Path


# Project root (two levels up from tests/utils/)
PROJ_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_TEST_LOG_LEVEL = logging.DEBUG
