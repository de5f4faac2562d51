"""
Resolve Workspace Use Case

Turns a bearer credential into the caller's workspace and role.
"""

from typing import Optional

from src.api.utils.jwt import user_id_from_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    MemberParticipant,
    OwnerParticipant,
    Participant,
    WorkspaceContext,
)
from src.libs.result import Error, Result, Return


class ResolveWorkspaceUseCase:
    """
    Use case for resolving who the caller is within a workspace.

    Business Rules:
    - Missing or invalid credential is rejected
    - Tenant owner (tenants.owner_user_id) resolves to role=owner
    - Otherwise the user's active membership decides tenant and role
    - A user with neither resolves without a workspace
    - Read-only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[WorkspaceContext]:
        """
        Execute resolve workspace use case.

        Args:
            token: Raw bearer token from the Authorization header

        Returns:
            Result with WorkspaceContext (tenant fields None when the user
            has no workspace), or Error
        """
        if not token:
            return Return.err(
                Error("MISSING_CREDENTIALS", "Missing or invalid authorization header")
            )

        user_id = user_id_from_token(token)
        if user_id is None:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "Invalid token"))

            participant: Optional[Participant] = None

            owned_tenant = await self.uow.tenants.get_by_owner_user_id(user.id)
            if owned_tenant is not None:
                participant = OwnerParticipant(tenant=owned_tenant)
            else:
                membership = await self.uow.memberships.get_active_by_user_id(user.id)
                if membership is not None:
                    tenant = await self.uow.tenants.get_by_id(membership.tenant_id)
                    if tenant is not None:
                        participant = MemberParticipant(
                            membership=membership, tenant=tenant
                        )

            return Return.ok(
                WorkspaceContext.from_participant(user.id, user.email, participant)
            )
