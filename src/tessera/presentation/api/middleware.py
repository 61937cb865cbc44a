"""Request middleware: correlation ids and bearer token authentication.

Two pieces sit in front of every route:

- ``MessageIdMiddleware`` gives each request a correlation id, taken from
  the ``x-message-id`` header or freshly generated, and echoes it back.
- ``JWTAuthenticationBackend`` runs under Starlette's
  ``AuthenticationMiddleware`` and turns a valid bearer token into a
  ``Principal`` on ``request.user``.

Authentication here never rejects a request. Public paths, missing
headers and bad tokens all leave the request anonymous; routes that need
an identity enforce it through ``require_principal``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import uuid4

from starlette.authentication import AuthCredentials, AuthenticationBackend
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import HTTPConnection, Request
from starlette.responses import Response

from tessera.application.context import Principal
from tessera_auth import InvalidTokenError, JWTService, TokenExpiredError

logger = logging.getLogger(__name__)

MESSAGE_ID_HEADER = "x-message-id"
BEARER_PREFIX = "Bearer "


def is_public_path(path: str, public_paths: Iterable[str]) -> bool:
    """Check a request path against the allow-list.

    Entries ending in ``*`` match any path starting with the rest of the
    entry; all other entries must match exactly.
    """
    for entry in public_paths:
        if entry.endswith("*"):
            if path.startswith(entry[:-1]):
                return True
        elif path == entry:
            return True
    return False


class MessageIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation id to ``request.state`` and to the response."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        message_id = request.headers.get(MESSAGE_ID_HEADER) or uuid4().hex
        request.state.message_id = message_id

        response = await call_next(request)
        response.headers[MESSAGE_ID_HEADER] = message_id
        return response


class JWTAuthenticationBackend(AuthenticationBackend):
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    Parameters
    ----------
    jwt_service
        Verifier for access tokens, shared with the login flow
    public_paths
        Allow-list of paths that skip token inspection entirely
    """

    def __init__(self, jwt_service: JWTService, public_paths: Iterable[str]):
        self._jwt_service = jwt_service
        self._public_paths = tuple(public_paths)

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, Principal] | None:
        if is_public_path(conn.url.path, self._public_paths):
            return None

        header = conn.headers.get("Authorization")
        if not header or not header.startswith(BEARER_PREFIX):
            return None

        token = header[len(BEARER_PREFIX) :].strip()
        try:
            payload = self._jwt_service.verify_token(token)
        except TokenExpiredError:
            logger.info("Expired token on %s, continuing anonymously", conn.url.path)
            return None
        except InvalidTokenError as e:
            logger.warning(
                "Rejected token on %s, continuing anonymously: %s",
                conn.url.path,
                e,
            )
            return None

        principal = Principal.from_token(payload)
        logger.debug("Authenticated user %s on %s", principal.user_id, conn.url.path)
        return AuthCredentials(["authenticated", principal.role.value]), principal
