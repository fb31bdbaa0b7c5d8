"""API v1."""

from fundingos.web.api.v1.router import router

__all__ = ["router"]
