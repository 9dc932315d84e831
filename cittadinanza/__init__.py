"""Cittadinanza Check: local pre-screening for Italian citizenship by descent."""

__version__ = "0.1.0"
