"""Tenant administration — invitations and plan upgrades (admin only)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenant_notes.core.config import Settings
from tenant_notes.core.errors import Conflict, InvalidStateTransition, NotFound, PermissionDenied
from tenant_notes.core.security import hash_password_async
from tenant_notes.models.base import utcnow
from tenant_notes.models.tenant import SubscriptionPlan, Tenant
from tenant_notes.models.user import User, UserRole
from tenant_notes.services.identity import Principal

logger = logging.getLogger(__name__)


def require_role(principal: Principal, role: UserRole, detail: str | None = None) -> None:
    """Raise PermissionDenied unless the principal holds ``role``."""
    if principal.role != role:
        raise PermissionDenied(detail or f"Only {role}s can perform this action")


async def invite_user(
    session: AsyncSession,
    principal: Principal,
    email: str,
    name: str,
    role: UserRole,
    settings: Settings,
) -> User:
    """Create a user in the admin's own tenant with the default password."""
    require_role(principal, UserRole.ADMIN, "Only admins can invite users")

    # Email is unique across all tenants
    existing = await session.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise Conflict("User with this email already exists")

    user = User(
        tenant_id=principal.tenant_id,
        email=email,
        name=name,
        role=role,
        password_hash=await hash_password_async(settings.invite_default_password),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise Conflict("User with this email already exists") from exc
    await session.refresh(user)

    logger.info(
        "User %s invited to tenant %s as %s by admin %s",
        user.id, principal.tenant_id, role, principal.user_id,
    )
    return user


async def upgrade_tenant(session: AsyncSession, principal: Principal, slug: str) -> Tenant:
    """Move the principal's own tenant from free to pro."""
    require_role(principal, UserRole.ADMIN, "Only admins can upgrade tenant subscriptions")

    # Filtering on both keys makes another tenant's slug look like a missing one
    result = await session.execute(
        select(Tenant).where(Tenant.slug == slug, Tenant.id == principal.tenant_id)
    )
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise NotFound("Tenant not found or access denied")

    if tenant.plan == SubscriptionPlan.PRO:
        raise InvalidStateTransition("Tenant is already on Pro plan", current_plan=tenant.plan)

    tenant.plan = SubscriptionPlan.PRO
    tenant.updated_at = utcnow()
    session.add(tenant)
    await session.commit()
    await session.refresh(tenant)

    logger.info("Tenant %s upgraded to pro by admin %s", tenant.slug, principal.user_id)
    return tenant
