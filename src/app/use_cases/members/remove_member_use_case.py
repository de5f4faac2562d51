"""
Remove Member Use Case

Handles removing (soft delete) members from a workspace.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    MemberNotification,
    MembershipRole,
    MembershipStatus,
    NotificationType,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing members from a workspace.

    Business Rules:
    - Only the owner can remove members
    - Owner cannot remove themselves
    - The tenant owner and role=owner rows cannot be removed
    - Soft delete: status=removed, row kept so a later join can reactivate it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: WorkspaceContext, target_user_id: UUID
    ) -> Result[RemoveMemberResponse]:
        """
        Execute remove member use case.

        Args:
            context: Resolved caller
            target_user_id: User ID of the member to remove

        Returns:
            Result with RemoveMemberResponse DTO, or Error
        """
        if not context.is_owner:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only the owner can remove team members")
            )

        if target_user_id == context.user_id:
            return Return.err(
                Error("CANNOT_MODIFY_SELF", "Cannot remove yourself from the workspace")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(context.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            target_membership = await self.uow.memberships.get_active_by_user_and_tenant(
                target_user_id, context.tenant_id
            )
            if target_membership is None:
                return Return.err(Error("MEMBER_NOT_FOUND", "Member not found"))

            if (
                target_membership.role == MembershipRole.owner
                or tenant.owner_user_id == target_user_id
            ):
                return Return.err(
                    Error("CANNOT_MODIFY_OWNER", "Cannot remove the owner")
                )

            target_membership.status = MembershipStatus.removed
            await self.uow.memberships.update(target_membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action="member_removed",
                    event_metadata={
                        "removed_user_id": str(target_user_id),
                        "removed_user_role": target_membership.role.value,
                    },
                )
            )
            await self.uow.notifications.create(
                MemberNotification(
                    tenant_id=context.tenant_id,
                    user_id=target_user_id,
                    type=NotificationType.member_removed,
                    title="Team Access Removed",
                    message="You have been removed from the team",
                )
            )

            await self.uow.commit()

            logger.info(
                "User %s removed from tenant %s", target_user_id, context.tenant_id
            )

            return Return.ok(RemoveMemberResponse(success=True, message="Member removed"))
