"""Tessera HTTP API (FastAPI)."""

from tessera.presentation.api.app import API_V1_PREFIX, API_VERSION, create_app

__all__ = ["API_V1_PREFIX", "API_VERSION", "create_app"]
