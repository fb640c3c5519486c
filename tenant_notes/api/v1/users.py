"""User invitations — admin only, into the admin's own tenant."""

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from tenant_notes.api.deps import AppSettings, Auth, Session
from tenant_notes.api.v1.auth import EMAIL_PATTERN
from tenant_notes.models.user import ActorRead, UserRead, UserRole
from tenant_notes.services.tenant_admin import invite_user

router = APIRouter(prefix="/users", tags=["users"])


class InviteRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    name: str = Field(min_length=1, max_length=100)
    role: UserRole


class InviteResponse(BaseModel):
    message: str = "User invited successfully"
    user: UserRead
    invited_by: ActorRead
    # Shared default password; only suitable for development / demo use
    default_password: str


@router.post("/invite", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
async def invite(
    body: InviteRequest,
    auth: Auth,
    session: Session,
    settings: AppSettings,
) -> InviteResponse:
    user = await invite_user(session, auth, body.email, body.name, body.role, settings)
    return InviteResponse(
        user=UserRead.model_validate(user),
        invited_by=ActorRead(id=auth.user_id, email=auth.email, role=auth.role),
        default_password=settings.invite_default_password,
    )
