"""Local web form for the pre-screening session."""

from .app import create_app

__all__ = ["create_app"]
