"""
Team Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ASSIGNABLE_ROLES,
    InvitationStatus,
    MembershipRole,
    MembershipStatus,
    NotificationType,
)

# Export all entities
from .user import User
from .tenant import Tenant
from .membership import Membership
from .invitation import Invitation
from .audit_event import AuditEvent
from .notification import MemberNotification
from .participant import (
    MemberParticipant,
    OwnerParticipant,
    Participant,
    WorkspaceContext,
    participant_role,
)

__all__ = [
    # Enums
    "ASSIGNABLE_ROLES",
    "MembershipRole",
    "MembershipStatus",
    "InvitationStatus",
    "NotificationType",
    # Entities
    "User",
    "Tenant",
    "Membership",
    "Invitation",
    "AuditEvent",
    "MemberNotification",
    # Participants
    "OwnerParticipant",
    "MemberParticipant",
    "Participant",
    "WorkspaceContext",
    "participant_role",
]
