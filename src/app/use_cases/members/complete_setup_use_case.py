"""
Complete Setup Use Case

Creates the account of a directly added member and activates the membership.
"""

import logging

import bcrypt
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, MemberNotification, NotificationType, User
from src.libs.integrity import is_unique_violation
from src.libs.result import Error, Result, Return

from .dtos import CompleteSetupResponse

logger = logging.getLogger(__name__)

DEFAULT_MIN_SETUP_PASSWORD_LENGTH = 8


class CompleteSetupUseCase:
    """
    Use case for finishing a directly added member's account.

    Business Rules:
    - Password needs at least 8 characters
    - The token must still be held by a member without a password
    - An existing account for the email must log in instead
    - The team limit is checked again against active members
    - The membership is activated with a conditional update; a concurrent
      loser gets SETUP_ALREADY_CLAIMED
    - Account creation and activation commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        min_password_length: int = DEFAULT_MIN_SETUP_PASSWORD_LENGTH,
    ):
        self.uow = uow
        self.min_password_length = min_password_length

    async def execute(self, token: str, password: str) -> Result[CompleteSetupResponse]:
        """
        Execute complete setup use case.

        Args:
            token: Password setup token from the setup link
            password: Password for the new account

        Returns:
            Result with CompleteSetupResponse DTO, or Error
        """
        if not password or len(password) < self.min_password_length:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {self.min_password_length} characters",
                )
            )

        async with self.uow:
            membership = await self.uow.memberships.get_by_setup_token(token)
            if membership is None:
                return Return.err(Error("SETUP_TOKEN_NOT_FOUND", "Invalid token"))

            if membership.password_set_at is not None:
                return Return.err(
                    Error(
                        "SETUP_ALREADY_COMPLETED",
                        "Password has already been set. Please log in.",
                    )
                )

            tenant = await self.uow.tenants.get_by_id(membership.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            account_exists = Error(
                "ACCOUNT_EXISTS",
                "An account with this email already exists. Please log in instead.",
            )
            if await self.uow.users.get_by_email(membership.email) is not None:
                return Return.err(account_exists)

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

            first_name, _, last_name = (membership.member_name or "").partition(" ")
            password_hash = bcrypt.hashpw(
                password.encode("utf-8"), bcrypt.gensalt(rounds=12)
            ).decode("utf-8")
            try:
                user = await self.uow.users.create(
                    User(
                        email=membership.email,
                        password_hash=password_hash,
                        first_name=first_name or None,
                        last_name=last_name or None,
                    )
                )
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                return Return.err(account_exists)

            now = utcnow()
            activated = await self.uow.memberships.complete_setup(
                membership.id, token, user.id, now
            )
            if not activated:
                return Return.err(
                    Error(
                        "SETUP_ALREADY_CLAIMED",
                        "Account setup has already been completed",
                    )
                )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user.id,
                    action="member_setup_completed",
                    event_metadata={
                        "membership_id": str(membership.id),
                        "role": membership.role.value,
                    },
                )
            )

            if tenant.owner_user_id is not None:
                await self.uow.notifications.create(
                    MemberNotification(
                        tenant_id=tenant.id,
                        user_id=tenant.owner_user_id,
                        type=NotificationType.member_joined,
                        title="New Team Member",
                        message=(
                            f"{user.display_name or user.email} joined the team "
                            f"as {membership.role.label}"
                        ),
                    )
                )

            response = CompleteSetupResponse(
                success=True,
                message="Account created successfully",
                user_id=str(user.id),
                tenant_id=str(tenant.id),
                email=user.email,
                access_token=generate_jwt(user.id),
            )

            await self.uow.commit()

            logger.info(
                "User %s completed setup in tenant %s", response.user_id, response.tenant_id
            )

            return Return.ok(response)
