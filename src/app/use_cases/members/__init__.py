"""
Membership Use Cases

Workspace resolution, team member management and direct onboarding.
"""

from .add_member_use_case import AddMemberUseCase
from .change_role_use_case import ChangeRoleUseCase
from .complete_setup_use_case import CompleteSetupUseCase
from .dtos import (
    AddedMemberInfo,
    AddMemberResponse,
    ChangeRoleResponse,
    CompleteSetupResponse,
    ListMembersResponse,
    MemberInfo,
    MembershipContextResponse,
    RemoveMemberResponse,
    SendSetupNotificationResponse,
    SetupPreviewResponse,
    UserProfile,
)
from .list_members_use_case import ListMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .resolve_workspace_use_case import ResolveWorkspaceUseCase
from .send_setup_notification_use_case import SendSetupNotificationUseCase
from .validate_setup_token_use_case import ValidateSetupTokenUseCase

__all__ = [
    "ResolveWorkspaceUseCase",
    "ListMembersUseCase",
    "ChangeRoleUseCase",
    "RemoveMemberUseCase",
    "AddMemberUseCase",
    "SendSetupNotificationUseCase",
    "ValidateSetupTokenUseCase",
    "CompleteSetupUseCase",
    "MembershipContextResponse",
    "MemberInfo",
    "ListMembersResponse",
    "ChangeRoleResponse",
    "RemoveMemberResponse",
    "AddedMemberInfo",
    "AddMemberResponse",
    "SendSetupNotificationResponse",
    "SetupPreviewResponse",
    "CompleteSetupResponse",
    "UserProfile",
]
