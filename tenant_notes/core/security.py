"""Security utilities: password hashing and session tokens."""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from pydantic import BaseModel, ValidationError

from tenant_notes.core.config import Settings

logger = logging.getLogger(__name__)

# ── Password hashing (Argon2) ────────────────────────────────

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (UnknownHashError, ValueError):
        return False


async def hash_password_async(password: str) -> str:
    """Hash off the event loop; Argon2 is deliberately slow."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password, plain, hashed)


# ── Session tokens (JWT) ─────────────────────────────────────

class TokenClaims(BaseModel):
    """Identity snapshot embedded in a session token.

    ``role`` and ``plan`` are informational only: they reflect the state at
    issuance and are re-read from the database for every request.
    """

    sub: uuid.UUID
    email: str
    role: str
    tid: uuid.UUID
    tenant_name: str
    plan: str


def create_session_token(
    claims: TokenClaims,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    if not settings.jwt_secret_key:
        raise RuntimeError("JWT_SECRET_KEY is not configured")
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.jwt_expire_days)
    )
    payload = claims.model_dump(mode="json")
    payload["exp"] = expire
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str, settings: Settings) -> TokenClaims | None:
    """Return the claims of a valid token, or None.

    Malformed, expired and tampered tokens all come back as None; callers
    never see an exception from here.
    """
    if not token or not settings.jwt_secret_key:
        return None
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        logger.info("Session token rejected: %s", exc)
        return None

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        logger.info("Session token rejected: malformed payload")
        return None
