"""Note model — tenant-scoped text note."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field as PydanticField, model_validator
from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel

from tenant_notes.models.base import TimestampMixin, new_uuid
from tenant_notes.models.user import AuthorRead

TITLE_MAX_LENGTH = 200


class Note(TimestampMixin, SQLModel, table=True):
    __tablename__ = "notes"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)

    title: str = Field(max_length=TITLE_MAX_LENGTH, nullable=False)
    content: str = Field(sa_column=Column(Text, nullable=False))


# ── Pydantic schemas ─────────────────────────────────────────

class NoteCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = PydanticField(min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = PydanticField(min_length=1)


class NoteUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = PydanticField(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = PydanticField(default=None, min_length=1)

    @model_validator(mode="after")
    def _at_least_one_field(self) -> "NoteUpdate":
        if self.title is None and self.content is None:
            raise ValueError("Provide at least one of title or content")
        return self


class NoteRead(SQLModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: AuthorRead
