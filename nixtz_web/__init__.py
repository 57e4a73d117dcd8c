"""Flask API around the roster engine."""

from .app import create_app

__all__ = ["create_app"]
