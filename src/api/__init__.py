"""HTTP API for the ingredient scanner."""

from api.app import app

__all__ = ["app"]
