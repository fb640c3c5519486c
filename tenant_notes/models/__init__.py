"""Import all models so SQLModel.metadata picks them up."""

from tenant_notes.models.note import Note, NoteCreate, NoteRead, NoteUpdate
from tenant_notes.models.tenant import SubscriptionPlan, Tenant, TenantRead, TenantSummary
from tenant_notes.models.user import (
    ActorRead,
    AuthorRead,
    User,
    UserRead,
    UserRole,
    UserSnapshot,
)

__all__ = [
    "ActorRead",
    "AuthorRead",
    "Note",
    "NoteCreate",
    "NoteRead",
    "NoteUpdate",
    "SubscriptionPlan",
    "Tenant",
    "TenantRead",
    "TenantSummary",
    "User",
    "UserRead",
    "UserRole",
    "UserSnapshot",
]
