"""Subscription policy — plan limits, usage and upgrade eligibility.

Limits are always checked against live row counts. Nothing here trusts the
plan embedded in a session token.

The check-then-insert sequence used for note creation is not atomic: two
concurrent requests for a free tenant sitting at ``max_notes - 1`` can both
pass the check. This is accepted for this domain.
"""

import uuid
from enum import StrEnum

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenant_notes.models.note import Note
from tenant_notes.models.tenant import SubscriptionPlan, Tenant
from tenant_notes.models.user import UserRole


class PlanAction(StrEnum):
    CREATE_NOTE = "create_note"


class PlanLimits(BaseModel):
    max_notes: int | None  # None means unlimited


PLAN_LIMITS: dict[SubscriptionPlan, PlanLimits] = {
    SubscriptionPlan.FREE: PlanLimits(max_notes=3),
    SubscriptionPlan.PRO: PlanLimits(max_notes=None),
}


class LimitCheck(BaseModel):
    allowed: bool
    reason: str | None = None
    current_count: int | None = None
    limit: int | None = None


class UsageRead(BaseModel):
    notes: int


class TenantInfo(BaseModel):
    name: str
    slug: str


class SubscriptionStatus(BaseModel):
    plan: SubscriptionPlan
    limits: PlanLimits
    usage: UsageRead
    tenant: TenantInfo


async def count_notes(session: AsyncSession, tenant_id: uuid.UUID) -> int:
    stmt = select(func.count()).select_from(Note).where(Note.tenant_id == tenant_id)
    return (await session.execute(stmt)).scalar_one()


async def check_limit(
    session: AsyncSession, tenant_id: uuid.UUID, action: PlanAction
) -> LimitCheck:
    """Decide whether ``action`` is allowed for the tenant's current plan."""
    tenant = await session.get(Tenant, tenant_id)
    if tenant is None:
        return LimitCheck(allowed=False, reason="Tenant not found")

    limits = PLAN_LIMITS[SubscriptionPlan(tenant.plan)]

    if action == PlanAction.CREATE_NOTE:
        if limits.max_notes is None:
            return LimitCheck(allowed=True)

        current = await count_notes(session, tenant_id)
        if current >= limits.max_notes:
            return LimitCheck(
                allowed=False,
                reason=(
                    f"Free plan limit reached. You can create up to {limits.max_notes} "
                    "notes. Upgrade to Pro for unlimited notes."
                ),
                current_count=current,
                limit=limits.max_notes,
            )
        return LimitCheck(allowed=True, current_count=current, limit=limits.max_notes)

    return LimitCheck(allowed=True)


async def get_status(session: AsyncSession, tenant_id: uuid.UUID) -> SubscriptionStatus | None:
    tenant = await session.get(Tenant, tenant_id)
    if tenant is None:
        return None

    plan = SubscriptionPlan(tenant.plan)
    return SubscriptionStatus(
        plan=plan,
        limits=PLAN_LIMITS[plan],
        usage=UsageRead(notes=await count_notes(session, tenant_id)),
        tenant=TenantInfo(name=tenant.name, slug=tenant.slug),
    )


def can_upgrade(role: str) -> bool:
    return role == UserRole.ADMIN
