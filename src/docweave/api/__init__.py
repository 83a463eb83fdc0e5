"""HTTP API for docweave."""

from .app import create_app

__all__ = ["create_app"]
