"""Demo data: two tenants with one admin and one member each."""

import logging

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenant_notes.core.security import hash_password_async
from tenant_notes.models.tenant import SubscriptionPlan, Tenant
from tenant_notes.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS: list[tuple[str, str, SubscriptionPlan]] = [
    ("Acme Corporation", "acme", SubscriptionPlan.FREE),
    ("Globex Corporation", "globex", SubscriptionPlan.PRO),
]


class SeedResult(BaseModel):
    tenants: int
    users: int
    password: str = DEMO_PASSWORD


async def _get_or_create_tenant(
    session: AsyncSession, name: str, slug: str, plan: SubscriptionPlan
) -> Tenant:
    result = await session.execute(select(Tenant).where(Tenant.slug == slug))
    tenant = result.scalar_one_or_none()
    if tenant is None:
        tenant = Tenant(name=name, slug=slug, plan=plan)
        session.add(tenant)
        await session.flush()  # populate tenant.id
    return tenant


async def seed_demo_data(session: AsyncSession) -> SeedResult:
    """Create the demo tenants and users. Existing rows are left as they are."""
    password_hash = await hash_password_async(DEMO_PASSWORD)
    users = 0

    for name, slug, plan in DEMO_TENANTS:
        tenant = await _get_or_create_tenant(session, name, slug, plan)
        short_name = name.split()[0]

        for local_part, role, label in (
            ("admin", UserRole.ADMIN, "Admin"),
            ("user", UserRole.MEMBER, "User"),
        ):
            email = f"{local_part}@{slug}.test"
            existing = await session.execute(select(User).where(User.email == email))
            if existing.scalar_one_or_none() is None:
                session.add(User(
                    tenant_id=tenant.id,
                    email=email,
                    name=f"{short_name} {label}",
                    role=role,
                    password_hash=password_hash,
                ))
            users += 1

    await session.commit()
    logger.info("Seeded %d demo tenants and %d users", len(DEMO_TENANTS), users)
    return SeedResult(tenants=len(DEMO_TENANTS), users=users)
