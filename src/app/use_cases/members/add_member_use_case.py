"""
Add Member Use Case

Adds a team member directly by name and email, without an invitation.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations.codes import new_setup_token, normalize_email
from src.domain.base import utcnow
from src.domain.entities import (
    ASSIGNABLE_ROLES,
    AuditEvent,
    MemberNotification,
    Membership,
    MembershipRole,
    MembershipStatus,
    NotificationType,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return

from .dtos import AddedMemberInfo, AddMemberResponse

logger = logging.getLogger(__name__)

# Directly added members hold a seat until they finish setup
SEATED_STATUSES = (MembershipStatus.active, MembershipStatus.pending)

MIN_NAME_LENGTH = 2


class AddMemberUseCase:
    """
    Use case for adding a member directly.

    Business Rules:
    - Only the owner can add members
    - Email must look like an address; name needs at least 2 characters
    - Role must be general_manager or accountant
    - Active and pending non-owner members must stay below the team limit
    - Existing active members (or the owner) cannot be added again
    - An existing account joins as active straight away; otherwise the row is
      pending with a password setup token
    - A pending or removed row for the same person is reused
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: WorkspaceContext,
        email: str,
        name: str,
        role: Optional[str],
    ) -> Result[AddMemberResponse]:
        """
        Execute add member use case.

        Args:
            context: Resolved caller
            email: Member email address
            name: Member display name
            role: general_manager or accountant

        Returns:
            Result with AddMemberResponse DTO, or Error
        """
        if not context.is_owner:
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "Only users with full member access can add team members",
                )
            )

        if not email or "@" not in email:
            return Return.err(Error("INVALID_EMAIL", "Valid email is required"))
        email = normalize_email(email)

        name = (name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            return Return.err(
                Error("INVALID_NAME", "Name is required (at least 2 characters)")
            )

        if not role:
            return Return.err(Error("INVALID_ROLE", "Role is required"))
        try:
            membership_role = MembershipRole(role)
        except ValueError:
            membership_role = None
        if membership_role not in ASSIGNABLE_ROLES:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    "Invalid role. Must be general_manager or accountant",
                )
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(context.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            limit = tenant.team_limit
            seated = await self.uow.memberships.count_non_owner(tenant.id, SEATED_STATUSES)
            if seated >= limit:
                return Return.err(
                    Error(
                        "MEMBER_LIMIT_REACHED",
                        f"Maximum team members reached ({limit})",
                        details={"limit": limit},
                    )
                )

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None and existing_user.id == tenant.owner_user_id:
                return Return.err(
                    Error("ALREADY_MEMBER", "This email is already a team member")
                )

            membership = None
            if existing_user is not None:
                membership = await self.uow.memberships.get_by_user_and_tenant(
                    existing_user.id, tenant.id
                )
            if membership is None:
                membership = await self.uow.memberships.get_pending_by_tenant_and_email(
                    tenant.id, email
                )
            if membership is not None and membership.status == MembershipStatus.active:
                return Return.err(
                    Error("ALREADY_MEMBER", "This email is already a team member")
                )

            now = utcnow()
            is_new = membership is None
            if is_new:
                membership = Membership(tenant_id=tenant.id)

            membership.email = email
            membership.member_name = name
            membership.role = membership_role
            membership.invited_by = context.user_id
            membership.invited_at = now
            if existing_user is not None:
                membership.user_id = existing_user.id
                membership.status = MembershipStatus.active
                membership.password_setup_token = None
                membership.password_set_at = now
                membership.joined_at = now
            else:
                membership.user_id = None
                membership.status = MembershipStatus.pending
                membership.password_setup_token = new_setup_token()
                membership.password_set_at = None
                membership.joined_at = None

            if is_new:
                membership = await self.uow.memberships.create(membership)
            else:
                membership = await self.uow.memberships.update(membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=context.user_id,
                    action="member_added",
                    event_metadata={
                        "membership_id": str(membership.id),
                        "email": email,
                        "role": membership_role.value,
                        "password_pending": membership.password_pending,
                    },
                )
            )

            if existing_user is not None:
                await self.uow.notifications.create(
                    MemberNotification(
                        tenant_id=tenant.id,
                        user_id=existing_user.id,
                        type=NotificationType.member_invited,
                        title="Team Invitation",
                        message=f"You've been invited to join {tenant.display_name}",
                    )
                )

            response = AddMemberResponse(
                success=True,
                member=AddedMemberInfo(
                    id=str(membership.id),
                    email=email,
                    name=name,
                    role=membership_role.value,
                    password_pending=membership.password_pending,
                ),
            )

            await self.uow.commit()

            logger.info(
                "Member %s added to tenant %s as %s (status %s)",
                email,
                tenant.id,
                membership_role.value,
                membership.status.value,
            )

            return Return.ok(response)
