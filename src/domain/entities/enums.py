"""
Team Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a tenant"""

    owner = "owner"
    general_manager = "general_manager"
    accountant = "accountant"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


# Roles an owner can hand out through invitations or role changes
ASSIGNABLE_ROLES = (MembershipRole.general_manager, MembershipRole.accountant)


class MembershipStatus(str, Enum):
    """Membership status"""

    pending = "pending"
    active = "active"
    suspended = "suspended"
    removed = "removed"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    cancelled = "cancelled"


class NotificationType(str, Enum):
    """Member notification kinds"""

    member_invited = "member_invited"
    member_joined = "member_joined"
    member_role_changed = "member_role_changed"
    member_removed = "member_removed"
