"""Release retention: decide which deployed releases to keep."""

__version__ = "0.1.0"
