"""Data transfer objects returned by application services."""

from tessera.application.dtos.login_result import LoginResult

__all__ = ["LoginResult"]
