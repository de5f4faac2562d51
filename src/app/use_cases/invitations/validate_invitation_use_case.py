"""
Validate Invitation Use Case

Public preview of an invitation before the invitee joins.
"""

from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Invitation, InvitationStatus
from src.libs.result import Error, Result, Return

from .dtos import ValidateInvitationResponse


class ValidateInvitationUseCase:
    """
    Use case for checking whether an invitation can still be redeemed.

    Business Rules:
    - Looked up by token, or by code (upper-cased) + email (case-insensitive)
    - Settled invitations report their status; stale ones report expiry
    - Read-only: expiry is never persisted here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def by_token(self, token: str) -> Result[ValidateInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invalid invitation")
                )
            return await self._preview(invitation)

    async def by_code(
        self, code: str, email: Optional[str]
    ) -> Result[ValidateInvitationResponse]:
        if not email:
            return Return.err(Error("MISSING_EMAIL", "Email is required"))

        async with self.uow:
            invitation = await self.uow.invitations.get_by_code_and_email(code, email)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invalid code or email")
                )
            return await self._preview(invitation)

    async def _preview(
        self, invitation: Invitation
    ) -> Result[ValidateInvitationResponse]:
        if invitation.status != InvitationStatus.pending:
            return Return.err(
                Error(
                    "INVITATION_NOT_PENDING",
                    f"Invitation has been {invitation.status.value}",
                    details={"status": invitation.status.value},
                )
            )

        if invitation.is_expired(utcnow()):
            return Return.err(Error("INVITATION_EXPIRED", "Invitation has expired"))

        tenant = await self.uow.tenants.get_by_id(invitation.tenant_id)

        return Return.ok(
            ValidateInvitationResponse(
                valid=True,
                email=invitation.email,
                role=invitation.role.value,
                tenant_id=str(invitation.tenant_id),
                tenant_name=tenant.display_name if tenant else "Workspace",
                tenant_logo=tenant.logo_url if tenant else None,
            )
        )
