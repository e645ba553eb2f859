"""API routers."""

from api.routers import additives, candidates, scan

__all__ = ["scan", "additives", "candidates"]
