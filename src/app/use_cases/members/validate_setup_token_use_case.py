"""
Validate Setup Token Use Case

Public preview of a password setup link.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

from .dtos import SetupPreviewResponse


class ValidateSetupTokenUseCase:
    """Checks that a setup token still belongs to a member waiting for a password"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[SetupPreviewResponse]:
        async with self.uow:
            membership = await self.uow.memberships.get_by_setup_token(token)
            if membership is None:
                return Return.err(
                    Error("SETUP_TOKEN_NOT_FOUND", "Invalid or expired token")
                )

            if membership.password_set_at is not None:
                return Return.err(
                    Error(
                        "SETUP_ALREADY_COMPLETED",
                        "Password has already been set. Please log in.",
                    )
                )

            tenant = await self.uow.tenants.get_by_id(membership.tenant_id)

            return Return.ok(
                SetupPreviewResponse(
                    valid=True,
                    email=membership.email,
                    name=membership.member_name,
                    role=membership.role.value,
                    tenant_name=tenant.display_name if tenant else "Workspace",
                    tenant_logo=tenant.logo_url if tenant else None,
                )
            )
