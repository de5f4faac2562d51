"""
Cancel Invitation Use Case

Handles withdrawing pending invitations.
"""

import logging
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import WorkspaceContext
from src.libs.result import Error, Result, Return

from .dtos import CancelInvitationResponse

logger = logging.getLogger(__name__)


class CancelInvitationUseCase:
    """
    Use case for cancelling a pending invitation.

    Business Rules:
    - Only the owner can cancel
    - Only pending invitations of the caller's tenant move to cancelled
    - Idempotent: cancelling an unknown or settled invitation still succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: WorkspaceContext, invitation_id: UUID
    ) -> Result[CancelInvitationResponse]:
        if not context.is_owner:
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "Only users with full member access can cancel invitations",
                )
            )

        async with self.uow:
            affected = await self.uow.invitations.cancel_pending(
                invitation_id, context.tenant_id
            )
            await self.uow.commit()

        if affected:
            logger.info(
                "Invitation %s cancelled in tenant %s", invitation_id, context.tenant_id
            )

        return Return.ok(
            CancelInvitationResponse(success=True, message="Invitation cancelled")
        )
