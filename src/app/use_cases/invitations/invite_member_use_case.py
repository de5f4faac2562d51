"""
Invite Member Use Case

Handles inviting people to join the workspace team.
"""

import logging
from datetime import timedelta

from src.app.services.invitation_mailer import InvitationMailer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    ASSIGNABLE_ROLES,
    AuditEvent,
    Invitation,
    InvitationStatus,
    MembershipRole,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return

from .codes import new_invitation_code, new_invitation_token, normalize_email
from .dtos import CreateInvitationResponse, to_invitation_info

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DAYS = 7


class InviteMemberUseCase:
    """
    Use case for inviting a member to the workspace.

    Business Rules:
    - Only the owner can invite
    - Email must look like an address; role must be general_manager or accountant
    - Active non-owner members must stay below the tenant's team limit
    - Existing active members cannot be invited again
    - At most one pending, unexpired invitation per (tenant, email);
      a stale pending one is moved to expired first
    - Invitation expires after 7 days
    - Creates audit event for compliance tracking
    """

    def __init__(
        self,
        uow: UnitOfWork,
        mailer: InvitationMailer,
        expiry_days: int = DEFAULT_EXPIRY_DAYS,
    ):
        self.uow = uow
        self.mailer = mailer
        self.expiry_days = expiry_days

    async def execute(
        self,
        context: WorkspaceContext,
        email: str,
        role: str,
        send_email: bool = False,
    ) -> Result[CreateInvitationResponse]:
        """
        Execute invite member use case.

        Args:
            context: Resolved caller
            email: Invitee email address
            role: Role to grant on join (general_manager/accountant)
            send_email: Whether to deliver the invitation through the mailer

        Returns:
            Result with CreateInvitationResponse DTO, or Error
        """
        if not context.is_owner:
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "Only users with full member access can invite team members",
                )
            )

        if not email or "@" not in email:
            return Return.err(Error("INVALID_EMAIL", "Valid email is required"))
        email = normalize_email(email)

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

            # Team size cap
            limit = tenant.team_limit
            active_count = await self.uow.memberships.count_active_non_owner(tenant.id)
            if active_count >= limit:
                return Return.err(
                    Error(
                        "MEMBER_LIMIT_REACHED",
                        f"Maximum team members reached ({limit})",
                        details={"limit": limit},
                    )
                )

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None:
                if existing_user.id == tenant.owner_user_id:
                    return Return.err(
                        Error("ALREADY_MEMBER", "This user is already a team member")
                    )
                existing_membership = (
                    await self.uow.memberships.get_active_by_user_and_tenant(
                        existing_user.id, tenant.id
                    )
                )
                if existing_membership is not None:
                    return Return.err(
                        Error("ALREADY_MEMBER", "This user is already a team member")
                    )

            now = utcnow()

            pending_invitation = await self.uow.invitations.get_pending_by_tenant_and_email(
                tenant.id, email
            )
            if pending_invitation is not None:
                if not pending_invitation.is_expired(now):
                    return Return.err(
                        Error(
                            "INVITATION_ALREADY_PENDING",
                            "An invitation is already pending for this email",
                            details={"invitation_id": str(pending_invitation.id)},
                        )
                    )
                pending_invitation.status = InvitationStatus.expired
                await self.uow.invitations.update(pending_invitation)

            invitation = Invitation(
                tenant_id=tenant.id,
                email=email,
                role=membership_role,
                invitation_token=new_invitation_token(),
                invitation_code=new_invitation_code(),
                invited_by=context.user_id,
                status=InvitationStatus.pending,
                invited_at=now,
                expires_at=now + timedelta(days=self.expiry_days),
                email_sent=send_email,
                email_sent_at=now if send_email else None,
            )
            invitation = await self.uow.invitations.create(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=context.user_id,
                    action="invitation_created",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "invited_email": email,
                        "role": membership_role.value,
                        "email_sent": send_email,
                    },
                )
            )

            response = CreateInvitationResponse(
                invitation=to_invitation_info(invitation),
                message=(
                    "Invitation sent via email"
                    if send_email
                    else "Invitation created. Share the code with the team member."
                ),
            )

            await self.uow.commit()

            if send_email:
                await self.mailer.send_invitation(invitation, tenant)

            logger.info(
                "Invitation %s created for %s in tenant %s",
                invitation.id,
                email,
                tenant.id,
            )

            return Return.ok(response)
