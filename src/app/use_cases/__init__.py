"""
Use Cases

Organized into domain folders:
- members/: Workspace resolution and team management
- invitations/: Invitation lifecycle and joining

Import from subdirectories for better organization.
"""

from .invitations import (
    CancelInvitationUseCase,
    InviteMemberUseCase,
    JoinWorkspaceUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from .members import (
    AddMemberUseCase,
    ChangeRoleUseCase,
    CompleteSetupUseCase,
    ListMembersUseCase,
    RemoveMemberUseCase,
    ResolveWorkspaceUseCase,
    SendSetupNotificationUseCase,
    ValidateSetupTokenUseCase,
)

__all__ = [
    # Members
    "ResolveWorkspaceUseCase",
    "ListMembersUseCase",
    "ChangeRoleUseCase",
    "RemoveMemberUseCase",
    "AddMemberUseCase",
    "SendSetupNotificationUseCase",
    "ValidateSetupTokenUseCase",
    "CompleteSetupUseCase",
    # Invitations
    "InviteMemberUseCase",
    "ListInvitationsUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    "ValidateInvitationUseCase",
    "JoinWorkspaceUseCase",
]
