"""Tenant model — top-level isolation boundary."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from tenant_notes.models.base import TimestampMixin, new_uuid


class SubscriptionPlan(StrEnum):
    FREE = "free"
    PRO = "pro"


class Tenant(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    slug: str = Field(max_length=100, unique=True, nullable=False, index=True)

    # free -> pro is the only transition; see services.tenant_admin
    plan: SubscriptionPlan = Field(default=SubscriptionPlan.FREE)


# ── Pydantic schemas ─────────────────────────────────────────

class TenantSummary(SQLModel):
    """Tenant fields embedded in the user snapshot."""
    id: uuid.UUID
    name: str
    slug: str
    plan: SubscriptionPlan


class TenantRead(SQLModel):
    id: uuid.UUID
    name: str
    slug: str
    plan: SubscriptionPlan
    updated_at: datetime
