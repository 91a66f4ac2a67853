"""API routers package."""

from autorecon.routers import reconciliation

__all__ = ["reconciliation"]
