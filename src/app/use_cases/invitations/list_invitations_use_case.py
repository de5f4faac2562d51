"""
List Invitations Use Case

Lists the workspace's pending invitations.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import WorkspaceContext
from src.libs.result import Error, Result, Return

from .dtos import InvitationListItem, ListInvitationsResponse


class ListInvitationsUseCase:
    """
    Use case for listing pending invitations.

    Business Rules:
    - Only the owner can list invitations
    - Pending invitations only, newest first
    - Flags stale invitations with is_expired without changing their status
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: WorkspaceContext) -> Result[ListInvitationsResponse]:
        if not context.is_owner:
            return Return.err(Error("INSUFFICIENT_ROLE", "Access denied"))

        now = utcnow()
        async with self.uow:
            invitations = await self.uow.invitations.list_pending_by_tenant(
                context.tenant_id
            )
            return Return.ok(
                ListInvitationsResponse(
                    invitations=[
                        InvitationListItem(
                            id=str(invitation.id),
                            email=invitation.email,
                            role=invitation.role.value,
                            invitation_code=invitation.invitation_code,
                            expires_at=invitation.expires_at.isoformat(),
                            status=invitation.status.value,
                            invited_at=invitation.invited_at.isoformat(),
                            email_sent=invitation.email_sent,
                            is_expired=invitation.is_expired(now),
                        )
                        for invitation in invitations
                    ]
                )
            )
