"""
Invitation Use Cases

Invitation lifecycle and the join workflow.
"""

from .cancel_invitation_use_case import CancelInvitationUseCase
from .dtos import (
    CancelInvitationResponse,
    CreateInvitationResponse,
    InvitationInfo,
    InvitationListItem,
    JoinWorkspaceResponse,
    ListInvitationsResponse,
    ResendInvitationResponse,
    ValidateInvitationResponse,
)
from .invite_member_use_case import InviteMemberUseCase
from .join_workspace_use_case import JoinWorkspaceUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .validate_invitation_use_case import ValidateInvitationUseCase

__all__ = [
    "InviteMemberUseCase",
    "ListInvitationsUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    "ValidateInvitationUseCase",
    "JoinWorkspaceUseCase",
    "InvitationInfo",
    "CreateInvitationResponse",
    "InvitationListItem",
    "ListInvitationsResponse",
    "CancelInvitationResponse",
    "ResendInvitationResponse",
    "ValidateInvitationResponse",
    "JoinWorkspaceResponse",
]
