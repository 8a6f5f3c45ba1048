from typing import Optional
from fastapi import Depends
from fastapi.security import APIKeyHeader
from devconnect.core.config import settings
from devconnect.core.errors import MissingToken
from devconnect.core.security import TokenService
from devconnect.services.github_service import GithubClient

# Extracts the token from the x-auth-token header
# auto_error=False so a missing header reaches get_current_user_id and gets our own 401 body
token_header_scheme = APIKeyHeader(name=settings.AUTH_TOKEN_HEADER, auto_error=False)


def get_token_service() -> TokenService:
    """Token service configured from application settings"""
    return TokenService.from_settings(settings)


def get_github_client() -> GithubClient:
    return GithubClient.from_settings(settings)


async def get_current_user_id(
    token: Optional[str] = Depends(token_header_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """
    Auth guard for private routes.

    Returns the user id carried by the request's token. A request without a
    token is rejected before any verification happens; an invalid or expired
    token is rejected by TokenService.verify. The guard never touches the
    database, so a token for a deleted account still passes here and is
    caught by whichever handler needs the user record.
    """
    if not token:
        raise MissingToken()

    return token_service.verify(token)
