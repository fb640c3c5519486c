"""User model — belongs to exactly one tenant."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlmodel import Field, SQLModel

from tenant_notes.models.base import TimestampMixin, new_uuid
from tenant_notes.models.tenant import TenantSummary


class UserRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    # Globally unique, compared case-sensitively as stored
    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    name: str = Field(default="", max_length=255)
    password_hash: str = Field(nullable=False)
    role: UserRole = Field(default=UserRole.MEMBER)


# ── Pydantic schemas ─────────────────────────────────────────

class UserRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    email: str
    name: str
    role: UserRole
    created_at: datetime


class UserSnapshot(SQLModel):
    """Current user as returned by login and /auth/me."""
    id: uuid.UUID
    email: str
    name: str
    role: UserRole
    tenant: TenantSummary


class AuthorRead(SQLModel):
    """Minimal author projection attached to every note."""
    id: uuid.UUID
    name: str
    email: str
    role: UserRole


class ActorRead(SQLModel):
    """The admin who performed an administrative action."""
    id: uuid.UUID
    email: str
    role: UserRole
