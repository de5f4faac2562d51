"""
List Members Use Case

Lists the workspace team with best-effort directory enrichment.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return

from .dtos import UNKNOWN_PROFILE, ListMembersResponse, MemberInfo, UserProfile

logger = logging.getLogger(__name__)

LISTED_STATUSES = (MembershipStatus.active, MembershipStatus.pending)


class ListMembersUseCase:
    """
    Use case for listing workspace members.

    Business Rules:
    - Owner and general_manager may list; accountant may not
    - Active and pending members, joined_at ascending with nulls last
    - Pending members without an account show their stored email and name
    - A failed directory lookup degrades that member to placeholder fields
    - max_members counts the implicit owner
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: WorkspaceContext) -> Result[ListMembersResponse]:
        if context.role not in (MembershipRole.owner, MembershipRole.general_manager):
            return Return.err(Error("INSUFFICIENT_ROLE", "Access denied"))

        async with self.uow:
            memberships = await self.uow.memberships.list_by_tenant(
                context.tenant_id, LISTED_STATUSES
            )

            members = []
            for membership in memberships:
                if membership.user_id is None:
                    # Added directly, no account yet
                    profile = UserProfile(
                        email=membership.email or UNKNOWN_PROFILE.email,
                        name=membership.member_name,
                        avatar_url=None,
                    )
                else:
                    lookup = await self._lookup_profile(membership.user_id)
                    profile = lookup.value if lookup.is_ok() else UNKNOWN_PROFILE
                members.append(self._to_member_info(membership, profile))

            return Return.ok(
                ListMembersResponse(
                    members=members,
                    total=len(members),
                    max_members=context.max_team_members + 1,
                )
            )

    async def _lookup_profile(self, user_id: UUID) -> Result[UserProfile]:
        try:
            user = await self.uow.users.get_by_id(user_id)
        except Exception as exc:
            logger.warning("Directory lookup failed for user %s: %s", user_id, exc)
            return Return.err(Error("DIRECTORY_UNAVAILABLE", str(exc)))

        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        return Return.ok(
            UserProfile(
                email=user.email,
                name=user.display_name,
                avatar_url=user.avatar_url,
            )
        )

    @staticmethod
    def _to_member_info(membership: Membership, profile: UserProfile) -> MemberInfo:
        return MemberInfo(
            id=str(membership.id),
            user_id=str(membership.user_id) if membership.user_id else None,
            email=profile.email,
            name=profile.name,
            avatar_url=profile.avatar_url,
            role=membership.role.value,
            status=membership.status.value,
            password_pending=membership.password_pending,
            invited_at=membership.invited_at.isoformat() if membership.invited_at else None,
            joined_at=membership.joined_at.isoformat() if membership.joined_at else None,
        )
