"""FastAPI dependencies for authentication and tenant resolution."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_notes.core.config import Settings, get_settings
from tenant_notes.core.database import get_session
from tenant_notes.core.errors import AuthenticationFailed
from tenant_notes.services.identity import Principal, resolve_from_token

bearer_scheme = HTTPBearer(auto_error=False)

Session = Annotated[AsyncSession, Depends(get_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_session_token(
    request: Request,
    settings: AppSettings,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Read the session token from an explicit bearer header, else the cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


SessionToken = Annotated[str | None, Depends(get_session_token)]


async def get_principal(
    token: SessionToken,
    session: Session,
    settings: AppSettings,
) -> Principal:
    """Resolve the caller, re-reading role and plan from the database."""
    if not token:
        raise AuthenticationFailed("Authentication required")

    principal = await resolve_from_token(session, token, settings)
    if principal is None:
        raise AuthenticationFailed("Invalid or expired token")
    return principal


# Typed shorthand for use in route signatures
Auth = Annotated[Principal, Depends(get_principal)]
