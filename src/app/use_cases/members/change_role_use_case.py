"""
Change Member Role Use Case

Handles changing a member's role within a workspace.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    ASSIGNABLE_ROLES,
    AuditEvent,
    MemberNotification,
    MembershipRole,
    NotificationType,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return

from .dtos import ChangeRoleResponse

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Use case for changing a member's role.

    Business Rules:
    - Only the owner can change roles
    - New role must be general_manager or accountant
    - Owner cannot change their own role
    - Target must hold an active membership
    - The tenant owner and role=owner rows are immutable
    - Records an audit event and notifies the member
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: WorkspaceContext, target_user_id: UUID, new_role: str
    ) -> Result[ChangeRoleResponse]:
        """
        Execute change role use case.

        Args:
            context: Resolved caller
            target_user_id: User whose role is being changed
            new_role: general_manager or accountant

        Returns:
            Result with ChangeRoleResponse DTO, or Error
        """
        if not context.is_owner:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only the owner can change member roles")
            )

        try:
            membership_role = MembershipRole(new_role)
        except ValueError:
            return Return.err(Error("INVALID_ROLE", "Invalid role"))
        if membership_role not in ASSIGNABLE_ROLES:
            return Return.err(Error("INVALID_ROLE", "Invalid role"))

        if target_user_id == context.user_id:
            return Return.err(
                Error("CANNOT_MODIFY_SELF", "Cannot change your own role")
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
                    Error("CANNOT_MODIFY_OWNER", "Cannot change the owner role")
                )

            old_role = target_membership.role.value
            target_membership.role = membership_role
            await self.uow.memberships.update(target_membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action="member_role_changed",
                    event_metadata={
                        "target_user_id": str(target_user_id),
                        "old_role": old_role,
                        "new_role": membership_role.value,
                    },
                )
            )
            await self.uow.notifications.create(
                MemberNotification(
                    tenant_id=context.tenant_id,
                    user_id=target_user_id,
                    type=NotificationType.member_role_changed,
                    title="Role Updated",
                    message=f"Your role has been changed to {membership_role.label}",
                )
            )

            await self.uow.commit()

            logger.info(
                "Role of user %s in tenant %s changed %s -> %s",
                target_user_id,
                context.tenant_id,
                old_role,
                membership_role.value,
            )

            return Return.ok(
                ChangeRoleResponse(
                    success=True,
                    message="Role updated",
                    new_role=membership_role.value,
                )
            )
