"""Exchange administrator credentials for a bearer token."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from core.domain.models import Credentials
from core.errors import AuthError
from core.interfaces.gateway import TaigaGateway

logger = structlog.get_logger()


async def authenticate(gateway: TaigaGateway, username: str, password: str) -> str:
    """Log in once and return the ``auth_token`` from the response body.

    No retry: malformed credentials and any transport or service failure are
    re-raised as ``AuthError`` with the original error as its cause.
    """

    try:
        credentials = Credentials(username=username, password=password)
    except ValidationError as exc:
        logger.warning("auth_failed", username=username, error="invalid credentials")
        raise AuthError(f"Invalid credentials for {username!r}: {exc}", exc) from exc

    logger.info("auth_started", username=credentials.username)
    try:
        body = await gateway.login(credentials.username, credentials.password)
    except Exception as exc:
        logger.warning("auth_failed", username=credentials.username, error=str(exc))
        raise AuthError(f"Authentication failed for {credentials.username!r}: {exc}", exc) from exc

    token = body.get("auth_token")
    if not isinstance(token, str) or not token:
        logger.warning("auth_failed", username=credentials.username, error="missing auth_token")
        raise AuthError(f"Authentication response for {credentials.username!r} has no auth_token")

    logger.info("auth_succeeded", username=credentials.username)
    return token
