# src/h5runner/meta.py
"""Program identity shared by logging and the public API."""

PROGRAM_PACKAGE = "h5runner"
PROGRAM_DISPLAY = "H5 Runner"
PROGRAM_ENV = "H5RUNNER"
