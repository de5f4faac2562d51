from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.invitation_mailer import InvitationMailer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationResponse,
    InviteMemberUseCase,
    JoinWorkspaceResponse,
    JoinWorkspaceUseCase,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from src.app.use_cases.members import (
    AddMemberResponse,
    AddMemberUseCase,
    ChangeRoleResponse,
    ChangeRoleUseCase,
    CompleteSetupResponse,
    CompleteSetupUseCase,
    ListMembersResponse,
    ListMembersUseCase,
    MembershipContextResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    SendSetupNotificationResponse,
    SendSetupNotificationUseCase,
    SetupPreviewResponse,
    ValidateSetupTokenUseCase,
)
from src.depends import get_invitation_mailer, get_unit_of_work, get_workspace_context
from src.domain.entities import WorkspaceContext

router = APIRouter(prefix="/members", tags=["Members"])


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    Email and role are checked by the use case so that bad values get the
    same error shape as every other business rule.
    """

    email: Optional[str] = Field(None, description="Email address to invite")
    role: Optional[str] = Field(None, description="general_manager or accountant")
    send_email: bool = Field(False, description="Deliver the invitation by email")


class AddMemberRequest(BaseModel):
    """Add member HTTP request payload"""

    email: Optional[str] = Field(None, description="Member email address")
    name: Optional[str] = Field(None, description="Member display name")
    role: Optional[str] = Field(None, description="general_manager or accountant")


class ChangeRoleRequest(BaseModel):
    """Change role HTTP request payload"""

    role: Optional[str] = Field(None, description="New role (general_manager/accountant)")


class CompleteSetupRequest(BaseModel):
    """Password setup HTTP request payload"""

    password: Optional[str] = None


class JoinRequest(BaseModel):
    """
    Join workspace HTTP request payload

    Either token, or code together with email, identifies the invitation.
    """

    token: Optional[str] = None
    code: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MembershipContextResponse)
async def get_my_membership(context: WorkspaceContext = Depends(get_workspace_context)):
    """
    Current Membership

    Returns the caller's workspace and role.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 404 Not Found: NO_WORKSPACE
    """
    return MembershipContextResponse(
        user_id=str(context.user_id),
        tenant_id=str(context.tenant_id),
        tenant_name=context.tenant_name,
        role=context.role.value,
        max_team_members=context.max_team_members,
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=ListMembersResponse)
async def list_members(
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Team Members

    Active and pending members with their directory profile.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (accountant)
        - 404 Not Found: NO_WORKSPACE
    """
    result = await ListMembersUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AddMemberResponse)
async def add_member(
    request: AddMemberRequest,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Team Member

    Adds a member directly. Members without an account stay pending until
    they set a password through their setup link.

    Raises:
        - 400 Bad Request: INVALID_EMAIL, INVALID_NAME, INVALID_ROLE,
                           MEMBER_LIMIT_REACHED, ALREADY_MEMBER
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE
    """
    result = await AddMemberUseCase(uow).execute(
        context, request.email or "", request.name or "", request.role
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInvitationResponse,
)
async def invite_member(
    request: InviteMemberRequest,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: InvitationMailer = Depends(get_invitation_mailer),
):
    """
    Invite Team Member

    Creates an invitation redeemable by link token or by code + email.

    Raises:
        - 400 Bad Request: INVALID_EMAIL, INVALID_ROLE, MEMBER_LIMIT_REACHED,
                           ALREADY_MEMBER, INVITATION_ALREADY_PENDING
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE
    """
    use_case = InviteMemberUseCase(
        uow, mailer, expiry_days=ApplicationConfig.INVITATION_EXPIRY_DAYS
    )
    result = await use_case.execute(
        context, request.email or "", request.role or "", request.send_email
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/invitations",
    status_code=status.HTTP_200_OK,
    response_model=ListInvitationsResponse,
)
async def list_invitations(
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Pending Invitations

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE
    """
    result = await ListInvitationsUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/invite/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=CancelInvitationResponse,
)
async def cancel_invitation(
    invitation_id: UUID,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Invitation

    Idempotent: succeeds even when nothing was pending.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE
    """
    result = await CancelInvitationUseCase(uow).execute(context, invitation_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invite/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    invitation_id: UUID,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: InvitationMailer = Depends(get_invitation_mailer),
):
    """
    Resend Invitation

    Issues a new code and extends the expiry; the link token is unchanged.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE, INVITATION_NOT_FOUND
    """
    use_case = ResendInvitationUseCase(
        uow, mailer, expiry_days=ApplicationConfig.INVITATION_EXPIRY_DAYS
    )
    result = await use_case.execute(context, invitation_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/invitation/code/{code}",
    status_code=status.HTTP_200_OK,
    response_model=ValidateInvitationResponse,
)
async def validate_invitation_code(
    code: str,
    email: Optional[str] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation Code (public)

    Raises:
        - 400 Bad Request: MISSING_EMAIL, INVITATION_NOT_PENDING, INVITATION_EXPIRED
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    result = await ValidateInvitationUseCase(uow).by_code(code, email)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/invitation/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ValidateInvitationResponse,
)
async def validate_invitation_token(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation Token (public)

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING, INVITATION_EXPIRED
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    result = await ValidateInvitationUseCase(uow).by_token(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/join", status_code=status.HTTP_200_OK, response_model=JoinWorkspaceResponse)
async def join_workspace(
    request: JoinRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join Workspace (public)

    Redeems an invitation, creating the account when the email is new.

    Raises:
        - 400 Bad Request: MISSING_INVITATION_REFERENCE, INVITATION_EXPIRED,
                           INVALID_PASSWORD, ALREADY_MEMBER, MEMBER_LIMIT_REACHED
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_CLAIMED
    """
    use_case = JoinWorkspaceUseCase(
        uow, min_password_length=ApplicationConfig.MIN_PASSWORD_LENGTH
    )
    result = await use_case.execute(
        token=request.token,
        code=request.code,
        email=request.email,
        password=request.password,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/setup/{token}",
    status_code=status.HTTP_200_OK,
    response_model=SetupPreviewResponse,
)
async def validate_setup_token(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Password Setup Link (public)

    Raises:
        - 400 Bad Request: SETUP_ALREADY_COMPLETED
        - 404 Not Found: SETUP_TOKEN_NOT_FOUND
    """
    result = await ValidateSetupTokenUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/setup/{token}",
    status_code=status.HTTP_200_OK,
    response_model=CompleteSetupResponse,
)
async def complete_setup(
    token: str,
    request: CompleteSetupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Complete Account Setup (public)

    Creates the member's account and activates the membership.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD, SETUP_ALREADY_COMPLETED,
                           ACCOUNT_EXISTS, MEMBER_LIMIT_REACHED
        - 404 Not Found: SETUP_TOKEN_NOT_FOUND
        - 409 Conflict: SETUP_ALREADY_CLAIMED
    """
    use_case = CompleteSetupUseCase(
        uow, min_password_length=ApplicationConfig.MIN_SETUP_PASSWORD_LENGTH
    )
    result = await use_case.execute(token, request.password or "")
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{membership_id}/send-notification",
    status_code=status.HTTP_200_OK,
    response_model=SendSetupNotificationResponse,
)
async def send_setup_notification(
    membership_id: UUID,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: InvitationMailer = Depends(get_invitation_mailer),
):
    """
    Send Password Setup Link

    Raises:
        - 400 Bad Request: SETUP_ALREADY_COMPLETED
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE, MEMBER_NOT_FOUND
    """
    result = await SendSetupNotificationUseCase(uow, mailer).execute(
        context, membership_id
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=ChangeRoleResponse
)
async def change_member_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Raises:
        - 400 Bad Request: INVALID_ROLE, CANNOT_MODIFY_SELF, CANNOT_MODIFY_OWNER
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE, MEMBER_NOT_FOUND
    """
    result = await ChangeRoleUseCase(uow).execute(context, user_id, request.role or "")
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=RemoveMemberResponse
)
async def remove_member(
    user_id: UUID,
    context: WorkspaceContext = Depends(get_workspace_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Team Member

    Soft delete; the member can rejoin through a new invitation.

    Raises:
        - 400 Bad Request: CANNOT_MODIFY_SELF, CANNOT_MODIFY_OWNER
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE (non-owner)
        - 404 Not Found: NO_WORKSPACE, MEMBER_NOT_FOUND
    """
    result = await RemoveMemberUseCase(uow).execute(context, user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
