"""
Resend Invitation Use Case

Handles re-issuing pending invitations with a fresh code and expiry.
"""

import logging
from datetime import timedelta
from uuid import UUID

from src.app.services.invitation_mailer import InvitationMailer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, InvitationStatus, WorkspaceContext
from src.libs.result import Error, Result, Return

from .codes import new_invitation_code
from .dtos import ResendInvitationResponse

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DAYS = 7


class ResendInvitationUseCase:
    """
    Use case for resending pending invitations.

    Business Rules:
    - Only the owner can resend
    - Invitation must belong to the tenant and still be pending
    - Regenerates the code and extends expiry to now + 7 days; the token is kept
    - Records an audit event and hands the invitation to the mailer
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
        self, context: WorkspaceContext, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        """
        Execute resend invitation use case.

        Args:
            context: Resolved caller
            invitation_id: ID of the invitation to resend

        Returns:
            Result with ResendInvitationResponse DTO, or Error
        """
        if not context.is_owner:
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "Only users with full member access can resend invitations",
                )
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id_and_tenant(
                invitation_id, context.tenant_id
            )
            if invitation is None or invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            tenant = await self.uow.tenants.get_by_id(context.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            now = utcnow()
            invitation.invitation_code = new_invitation_code()
            invitation.expires_at = now + timedelta(days=self.expiry_days)
            invitation.email_sent = True
            invitation.email_sent_at = now
            invitation = await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action="invitation_resent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            response = ResendInvitationResponse(
                success=True,
                message="Invitation resent",
                invitation_code=invitation.invitation_code,
                expires_at=invitation.expires_at.isoformat(),
            )

            await self.uow.commit()

            await self.mailer.send_invitation(invitation, tenant)

            logger.info("Invitation %s resent to %s", invitation.id, invitation.email)

            return Return.ok(response)
