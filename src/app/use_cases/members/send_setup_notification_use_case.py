"""
Send Setup Notification Use Case

Re-sends the password setup link to a directly added member.
"""

import logging
from uuid import UUID

from src.app.services.invitation_mailer import InvitationMailer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, WorkspaceContext
from src.libs.result import Error, Result, Return

from .dtos import SendSetupNotificationResponse

logger = logging.getLogger(__name__)


class SendSetupNotificationUseCase:
    """
    Use case for delivering a member's password setup link.

    Business Rules:
    - Only the owner can send setup links
    - The member must belong to the caller's workspace
    - Only members still waiting to set a password have a link
    - The delivery time is stamped on the membership
    """

    def __init__(self, uow: UnitOfWork, mailer: InvitationMailer):
        self.uow = uow
        self.mailer = mailer

    async def execute(
        self, context: WorkspaceContext, membership_id: UUID
    ) -> Result[SendSetupNotificationResponse]:
        if not context.is_owner:
            return Return.err(Error("INSUFFICIENT_ROLE", "Access denied"))

        async with self.uow:
            membership = await self.uow.memberships.get_by_id_and_tenant(
                membership_id, context.tenant_id
            )
            if membership is None:
                return Return.err(Error("MEMBER_NOT_FOUND", "Member not found"))

            if not membership.password_pending:
                return Return.err(
                    Error(
                        "SETUP_ALREADY_COMPLETED",
                        "Member has already set their password",
                    )
                )

            tenant = await self.uow.tenants.get_by_id(context.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            membership.email_notification_sent_at = utcnow()
            membership = await self.uow.memberships.update(membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action="member_setup_link_sent",
                    event_metadata={"membership_id": str(membership.id)},
                )
            )

            response = SendSetupNotificationResponse(
                success=True,
                message="Notification sent",
                setup_link=self.mailer.setup_link(membership),
                member_email=membership.email,
                member_name=membership.member_name,
            )

            await self.uow.commit()

            await self.mailer.send_setup_link(membership, tenant)

            logger.info("Setup link sent for membership %s", membership.id)

            return Return.ok(response)
