"""Identity resolution — turn a token or credentials into a Principal.

The token only proves *who* is calling. Role and plan are always reloaded
from the database, so a demoted user or an upgraded tenant takes effect on
the very next request.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenant_notes.core.config import Settings
from tenant_notes.core.errors import AuthenticationFailed
from tenant_notes.core.security import TokenClaims, verify_password_async, verify_session_token
from tenant_notes.models.tenant import SubscriptionPlan, Tenant, TenantSummary
from tenant_notes.models.user import User, UserRole, UserSnapshot

logger = logging.getLogger(__name__)


class Principal:
    """Resolved identity carried through a request."""

    __slots__ = ("user_id", "email", "name", "role", "tenant_id", "tenant")

    def __init__(self, user: User, tenant: Tenant) -> None:
        self.user_id: uuid.UUID = user.id
        self.email: str = user.email
        self.name: str = user.name
        self.role = UserRole(user.role)
        self.tenant_id: uuid.UUID = tenant.id
        self.tenant = TenantSummary(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            plan=SubscriptionPlan(tenant.plan),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_claims(self) -> TokenClaims:
        return TokenClaims(
            sub=self.user_id,
            email=self.email,
            role=self.role,
            tid=self.tenant_id,
            tenant_name=self.tenant.name,
            plan=self.tenant.plan,
        )

    def to_snapshot(self) -> UserSnapshot:
        return UserSnapshot(
            id=self.user_id,
            email=self.email,
            name=self.name,
            role=self.role,
            tenant=self.tenant,
        )

    def __repr__(self) -> str:
        return f"Principal(user_id={self.user_id}, tenant_id={self.tenant_id}, role={self.role})"


async def load_principal(session: AsyncSession, user_id: uuid.UUID) -> Principal | None:
    """Load a user and their tenant by user id."""
    user = await session.get(User, user_id)
    if user is None:
        return None
    tenant = await session.get(Tenant, user.tenant_id)
    if tenant is None:
        return None
    return Principal(user, tenant)


async def resolve_claims(session: AsyncSession, claims: TokenClaims) -> Principal | None:
    """Reload the principal named by verified claims.

    Returns None when the user no longer exists. A token whose tenant differs
    from the user's stored tenant raises ``AuthenticationFailed``.
    """
    principal = await load_principal(session, claims.sub)
    if principal is None:
        logger.info("Token for user %s refers to a user that no longer exists", claims.sub)
        return None
    if principal.tenant_id != claims.tid:
        logger.warning(
            "Token tenant %s does not match stored tenant %s for user %s",
            claims.tid, principal.tenant_id, claims.sub,
        )
        raise AuthenticationFailed("Invalid or expired token")
    return principal


async def resolve_from_token(
    session: AsyncSession, token: str, settings: Settings
) -> Principal | None:
    claims = verify_session_token(token, settings)
    if claims is None:
        return None
    return await resolve_claims(session, claims)


async def authenticate_by_credentials(
    session: AsyncSession, email: str, password: str
) -> Principal | None:
    """Exact (case-sensitive) email lookup followed by password verification."""
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info("Login failed: unknown email")
        return None

    if not await verify_password_async(password, user.password_hash):
        logger.info("Login failed: wrong password for user %s", user.id)
        return None

    tenant = await session.get(Tenant, user.tenant_id)
    if tenant is None:
        return None
    return Principal(user, tenant)
