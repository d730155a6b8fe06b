"""
API Dependencies
Reusable FastAPI dependencies for endpoint protection.
"""

from fastapi import Depends, Request

from app.config import Settings
from app.exceptions import ForbiddenError, UnauthenticatedError
from app.schemas.user import TokenData
from app.services import auth_service


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def extract_bearer_token(header_value: str | None) -> str:
    """Return the token from a "Bearer <token>" header value."""
    if not header_value:
        raise UnauthenticatedError("You are not authenticated!")

    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthenticatedError("Token is not valid!")
    return token.strip()


async def get_current_claims(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenData:
    """
    Dependency that enforces authentication.
    Verifies the bearer token and exposes its claims on request.state.
    """
    token = extract_bearer_token(request.headers.get(settings.token_header))
    claims = auth_service.decode_access_token(token, settings)
    request.state.claims = claims
    return claims


async def require_admin(claims: TokenData = Depends(get_current_claims)) -> TokenData:
    """
    Dependency that enforces admin privileges.
    Token must be valid (via get_current_claims) and carry the admin flag.
    """
    if not claims.is_admin:
        raise ForbiddenError("You are not allowed to do that!")
    return claims


async def require_owner_or_admin(
    user_id: int,
    claims: TokenData = Depends(get_current_claims),
) -> TokenData:
    """Allow the account owner (matching path user_id) or any admin."""
    if claims.id != user_id and not claims.is_admin:
        raise ForbiddenError("You are not allowed to do that!")
    return claims
