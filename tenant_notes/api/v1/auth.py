"""Authentication endpoints — login, logout, current user and demo seeding."""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from tenant_notes.api.deps import AppSettings, Session, SessionToken
from tenant_notes.core.config import Settings
from tenant_notes.core.errors import AuthenticationFailed, NotFound
from tenant_notes.core.security import create_session_token, verify_session_token
from tenant_notes.models.user import UserSnapshot
from tenant_notes.services.identity import authenticate_by_credentials, resolve_claims
from tenant_notes.services.seed import SeedResult, seed_demo_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ── Schemas ──────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=128)


class LoginResponse(BaseModel):
    user: UserSnapshot
    access_token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    user: UserSnapshot


class SeedResponse(BaseModel):
    success: bool = True
    message: str = "Database seeded successfully"
    data: SeedResult


# ── Cookie helpers ───────────────────────────────────────────

def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=not settings.is_development,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=not settings.is_development,
    )


# ── Routes ───────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    session: Session,
    settings: AppSettings,
) -> LoginResponse:
    """Authenticate with email + password, receive a session cookie and JWT."""
    principal = await authenticate_by_credentials(session, body.email, body.password)
    if principal is None:
        raise AuthenticationFailed("Invalid email or password")

    token = create_session_token(principal.to_claims(), settings)
    set_session_cookie(response, token, settings)
    logger.info("User %s logged in to tenant %s", principal.user_id, principal.tenant_id)

    return LoginResponse(user=principal.to_snapshot(), access_token=token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(settings: AppSettings) -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookie(response, settings)
    return response


@router.get("/me", response_model=MeResponse)
async def get_me(token: SessionToken, session: Session, settings: AppSettings) -> MeResponse:
    """Return the current user with role and plan as stored right now."""
    if not token:
        raise AuthenticationFailed("No authentication token")

    claims = verify_session_token(token, settings)
    if claims is None:
        raise AuthenticationFailed("Invalid token")

    principal = await resolve_claims(session, claims)
    if principal is None:
        raise NotFound("User not found")

    return MeResponse(user=principal.to_snapshot())


@router.post("/seed", response_model=SeedResponse)
async def seed(session: Session, settings: AppSettings) -> SeedResponse:
    """Create the Acme (free) and Globex (pro) demo tenants."""
    if not settings.enable_seed_endpoint:
        raise NotFound()
    return SeedResponse(data=await seed_demo_data(session))
