"""Tenant plan upgrade endpoint."""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from tenant_notes.api.deps import Auth, Session
from tenant_notes.models.tenant import TenantRead
from tenant_notes.models.user import ActorRead
from tenant_notes.services.tenant_admin import upgrade_tenant

router = APIRouter(prefix="/tenants", tags=["tenants"])


class UpgradeResponse(BaseModel):
    message: str = "Tenant successfully upgraded to Pro plan"
    tenant: TenantRead
    upgraded_by: ActorRead
    upgraded_at: datetime


@router.post(
    "/{slug}/upgrade",
    response_model=UpgradeResponse,
    summary="Upgrade the caller's tenant to the Pro plan",
)
async def upgrade(slug: str, auth: Auth, session: Session) -> UpgradeResponse:
    """Admins may upgrade only their own tenant; no payment is taken."""
    tenant = await upgrade_tenant(session, auth, slug)
    return UpgradeResponse(
        tenant=TenantRead.model_validate(tenant),
        upgraded_by=ActorRead(id=auth.user_id, email=auth.email, role=auth.role),
        upgraded_at=tenant.updated_at,
    )
