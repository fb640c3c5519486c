"""Tenant-scoped note store.

Every query filters on ``tenant_id``. A note that exists in another tenant
is reported exactly like a missing note.
"""

import uuid

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tenant_notes.core.errors import ValidationFailed
from tenant_notes.models.base import utcnow
from tenant_notes.models.note import TITLE_MAX_LENGTH, Note, NoteRead
from tenant_notes.models.user import AuthorRead, User


def _to_read(note: Note, author: User) -> NoteRead:
    return NoteRead(
        id=note.id,
        tenant_id=note.tenant_id,
        user_id=note.user_id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
        user=AuthorRead.model_validate(author),
    )


def _clean_title(title: str, errors: list[dict]) -> str:
    title = title.strip()
    if not title:
        errors.append({"field": "title", "message": "Title is required"})
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append({"field": "title", "message": "Title too long"})
    return title


def _clean_content(content: str, errors: list[dict]) -> str:
    content = content.strip()
    if not content:
        errors.append({"field": "content", "message": "Content is required"})
    return content


def _with_author(tenant_id: uuid.UUID):
    return (
        select(Note, User)
        .join(User, Note.user_id == User.id)  # type: ignore[arg-type]
        .where(Note.tenant_id == tenant_id)
    )


async def _get_row(
    session: AsyncSession, tenant_id: uuid.UUID, note_id: uuid.UUID
) -> tuple[Note, User] | None:
    result = await session.execute(_with_author(tenant_id).where(Note.id == note_id))
    row = result.one_or_none()
    return (row[0], row[1]) if row is not None else None


async def list_notes(
    session: AsyncSession, tenant_id: uuid.UUID, search: str | None = None
) -> list[NoteRead]:
    stmt = _with_author(tenant_id)

    term = (search or "").strip()
    if term:
        stmt = stmt.where(
            or_(
                Note.title.icontains(term, autoescape=True),  # type: ignore[attr-defined]
                Note.content.icontains(term, autoescape=True),  # type: ignore[attr-defined]
            )
        )

    stmt = stmt.order_by(
        Note.updated_at.desc(),  # type: ignore[attr-defined]
        Note.created_at.desc(),  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return [_to_read(note, author) for note, author in result.all()]


async def get_note(
    session: AsyncSession, tenant_id: uuid.UUID, note_id: uuid.UUID
) -> NoteRead | None:
    row = await _get_row(session, tenant_id, note_id)
    return _to_read(*row) if row is not None else None


async def create_note(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    author_id: uuid.UUID,
    title: str,
    content: str,
) -> NoteRead:
    """Insert a note for ``tenant_id``.

    Plan limits are *not* checked here; callers run
    ``subscription.check_limit`` first.
    """
    errors: list[dict] = []
    title = _clean_title(title, errors)
    content = _clean_content(content, errors)
    if errors:
        raise ValidationFailed(errors=errors)

    author = await session.get(User, author_id)
    if author is None or author.tenant_id != tenant_id:
        raise ValidationFailed("Author does not belong to this tenant")

    note = Note(tenant_id=tenant_id, user_id=author_id, title=title, content=content)
    session.add(note)
    await session.commit()
    await session.refresh(note)
    return _to_read(note, author)


async def update_note(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    note_id: uuid.UUID,
    title: str | None = None,
    content: str | None = None,
) -> NoteRead | None:
    if title is None and content is None:
        raise ValidationFailed(
            errors=[{"field": None, "message": "Provide at least one of title or content"}]
        )

    errors: list[dict] = []
    if title is not None:
        title = _clean_title(title, errors)
    if content is not None:
        content = _clean_content(content, errors)
    if errors:
        raise ValidationFailed(errors=errors)

    row = await _get_row(session, tenant_id, note_id)
    if row is None:
        return None
    note, author = row

    if title is not None:
        note.title = title
    if content is not None:
        note.content = content
    note.updated_at = utcnow()
    session.add(note)
    await session.commit()
    await session.refresh(note)
    return _to_read(note, author)


async def delete_note(
    session: AsyncSession, tenant_id: uuid.UUID, note_id: uuid.UUID
) -> bool:
    result = await session.execute(
        select(Note).where(Note.id == note_id, Note.tenant_id == tenant_id)
    )
    note = result.scalar_one_or_none()
    if note is None:
        return False
    await session.delete(note)
    await session.commit()
    return True
