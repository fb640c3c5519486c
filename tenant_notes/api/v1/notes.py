"""Note CRUD — all queries scoped to the caller's tenant."""

import logging
import uuid

from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel

from tenant_notes.api.deps import Auth, Session
from tenant_notes.core.errors import NotFound, PlanLimitExceeded
from tenant_notes.models.note import NoteCreate, NoteRead, NoteUpdate
from tenant_notes.services import notes as note_store
from tenant_notes.services.subscription import PlanAction, check_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


class NoteListResponse(BaseModel):
    notes: list[NoteRead]


class NoteResponse(BaseModel):
    note: NoteRead


@router.get("", response_model=NoteListResponse)
async def list_notes(
    auth: Auth,
    session: Session,
    search: str | None = Query(default=None, max_length=200),
) -> NoteListResponse:
    notes = await note_store.list_notes(session, auth.tenant_id, search)
    return NoteListResponse(notes=notes)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(body: NoteCreate, auth: Auth, session: Session) -> NoteResponse:
    check = await check_limit(session, auth.tenant_id, PlanAction.CREATE_NOTE)
    if not check.allowed:
        logger.info(
            "Note creation denied for tenant %s: %s/%s notes",
            auth.tenant_id, check.current_count, check.limit,
        )
        raise PlanLimitExceeded(
            "Subscription limit exceeded",
            message=check.reason,
            current_count=check.current_count,
            limit=check.limit,
        )

    note = await note_store.create_note(
        session, auth.tenant_id, auth.user_id, body.title, body.content
    )
    return NoteResponse(note=note)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: uuid.UUID, auth: Auth, session: Session) -> NoteResponse:
    note = await note_store.get_note(session, auth.tenant_id, note_id)
    if note is None:
        raise NotFound("Note not found")
    return NoteResponse(note=note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: uuid.UUID,
    body: NoteUpdate,
    auth: Auth,
    session: Session,
) -> NoteResponse:
    note = await note_store.update_note(
        session, auth.tenant_id, note_id, title=body.title, content=body.content
    )
    if note is None:
        raise NotFound("Note not found")
    return NoteResponse(note=note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: uuid.UUID, auth: Auth, session: Session) -> Response:
    if not await note_store.delete_note(session, auth.tenant_id, note_id):
        raise NotFound("Note not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
