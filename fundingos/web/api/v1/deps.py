"""Shared route dependencies."""

from fastapi import Request

from fundingos.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings
