"""
Invitation Use Case DTOs (Data Transfer Objects)

Response classes for the invitation and join workflow.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Invitation


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationInfo(BaseModel):
    """Invitation as returned to the owner right after creation"""

    id: str
    email: str
    role: str
    invitation_code: str
    invitation_token: str
    expires_at: str
    status: str


class CreateInvitationResponse(BaseModel):
    """Response for create invitation use case"""

    invitation: InvitationInfo
    message: str


class InvitationListItem(BaseModel):
    """Pending invitation entry in the invitation list"""

    id: str
    email: str
    role: str
    invitation_code: str
    expires_at: str
    status: str
    invited_at: str
    email_sent: bool
    is_expired: bool


class ListInvitationsResponse(BaseModel):
    """Response for list invitations use case"""

    invitations: List[InvitationListItem]


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    success: bool
    message: str


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    success: bool
    message: str
    invitation_code: str
    expires_at: str


class ValidateInvitationResponse(BaseModel):
    """Public preview of a redeemable invitation"""

    valid: bool
    email: str
    role: str
    tenant_id: str
    tenant_name: str
    tenant_logo: Optional[str] = None


class JoinWorkspaceResponse(BaseModel):
    """Response for join workspace use case"""

    success: bool
    tenant_id: str
    user_id: str
    role: str
    is_new_account: bool
    access_token: str


def to_invitation_info(invitation: Invitation) -> InvitationInfo:
    return InvitationInfo(
        id=str(invitation.id),
        email=invitation.email,
        role=invitation.role.value,
        invitation_code=invitation.invitation_code,
        invitation_token=invitation.invitation_token,
        expires_at=invitation.expires_at.isoformat(),
        status=invitation.status.value,
    )
