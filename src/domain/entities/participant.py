"""
Participant

How a user takes part in a workspace: either as its implicit owner or
through an active membership row.
"""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from .enums import MembershipRole
from .membership import Membership
from .tenant import Tenant


@dataclass(frozen=True)
class OwnerParticipant:
    tenant: Tenant


@dataclass(frozen=True)
class MemberParticipant:
    membership: Membership
    tenant: Tenant


Participant = Union[OwnerParticipant, MemberParticipant]


def participant_role(participant: Participant) -> MembershipRole:
    if isinstance(participant, OwnerParticipant):
        return MembershipRole.owner
    return participant.membership.role


@dataclass(frozen=True)
class WorkspaceContext:
    """
    Resolved caller, detached from the persistence session.

    tenant_id and role are None when the user has no workspace.
    """

    user_id: UUID
    email: str
    tenant_id: Optional[UUID] = None
    tenant_name: Optional[str] = None
    role: Optional[MembershipRole] = None
    max_team_members: Optional[int] = None

    @property
    def has_workspace(self) -> bool:
        return self.tenant_id is not None and self.role is not None

    @property
    def is_owner(self) -> bool:
        return self.role == MembershipRole.owner

    @classmethod
    def from_participant(
        cls, user_id: UUID, email: str, participant: Optional[Participant]
    ) -> "WorkspaceContext":
        if participant is None:
            return cls(user_id=user_id, email=email)
        tenant = participant.tenant
        return cls(
            user_id=user_id,
            email=email,
            tenant_id=tenant.id,
            tenant_name=tenant.display_name,
            role=participant_role(participant),
            max_team_members=tenant.team_limit,
        )
