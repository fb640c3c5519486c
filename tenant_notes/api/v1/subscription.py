"""Subscription status and usage for the caller's tenant."""

from fastapi import APIRouter
from pydantic import BaseModel

from tenant_notes.api.deps import Auth, Session
from tenant_notes.core.errors import NotFound
from tenant_notes.models.user import UserRole
from tenant_notes.services.subscription import SubscriptionStatus, can_upgrade, get_status

router = APIRouter(prefix="/subscription", tags=["subscription"])


class SubscriptionUser(BaseModel):
    role: UserRole
    can_upgrade: bool


class SubscriptionStatusResponse(BaseModel):
    subscription: SubscriptionStatus
    user: SubscriptionUser


@router.get("/status", response_model=SubscriptionStatusResponse)
async def subscription_status(auth: Auth, session: Session) -> SubscriptionStatusResponse:
    status = await get_status(session, auth.tenant_id)
    if status is None:
        raise NotFound("Subscription status not found")

    return SubscriptionStatusResponse(
        subscription=status,
        user=SubscriptionUser(role=auth.role, can_upgrade=can_upgrade(auth.role)),
    )
