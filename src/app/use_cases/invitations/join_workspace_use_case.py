"""
Join Workspace Use Case

Redeems an invitation into an active membership, creating the account when
the invitee has none yet.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    Invitation,
    InvitationStatus,
    MemberNotification,
    MembershipStatus,
    NotificationType,
    User,
)
from src.libs.integrity import is_unique_violation
from src.libs.result import Error, Result, Return

from .dtos import JoinWorkspaceResponse

logger = logging.getLogger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6


class JoinWorkspaceUseCase:
    """
    Use case for joining a workspace through an invitation.

    Business Rules:
    - Invitation is referenced by token, or by code + email
    - Only pending invitations can be redeemed; a stale one is marked expired
    - Existing accounts are reused; new accounts need a password (min 6 chars)
    - Active members cannot join again
    - The team limit is checked again at join time
    - The invitation is claimed with a conditional update; a concurrent
      loser gets INVITATION_ALREADY_CLAIMED
    - A removed membership row is reactivated with the invited role
    - Account creation, claim and membership commit together
    """

    def __init__(
        self, uow: UnitOfWork, min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH
    ):
        self.uow = uow
        self.min_password_length = min_password_length

    async def execute(
        self,
        token: Optional[str] = None,
        code: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Result[JoinWorkspaceResponse]:
        """
        Execute join workspace use case.

        Args:
            token: Invitation token from the join link
            code: Invitation code (used together with email)
            email: Invitee email (used together with code)
            password: Password for the new account, ignored for existing ones

        Returns:
            Result with JoinWorkspaceResponse DTO, or Error
        """
        if not token and not (code and email):
            return Return.err(
                Error(
                    "MISSING_INVITATION_REFERENCE",
                    "Either token or code+email is required",
                )
            )

        async with self.uow:
            invitation = await self._find_pending(token, code, email)
            if invitation is None:
                return Return.err(
                    Error(
                        "INVITATION_NOT_FOUND",
                        "Invalid or expired invitation" if token else "Invalid code or email",
                    )
                )

            now = utcnow()

            if invitation.is_expired(now):
                invitation.status = InvitationStatus.expired
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                logger.info("Invitation %s expired on join attempt", invitation.id)
                return Return.err(Error("INVITATION_EXPIRED", "Invitation has expired"))

            tenant = await self.uow.tenants.get_by_id(invitation.tenant_id)
            if tenant is None:
                return Return.err(Error("NO_WORKSPACE", "No workspace found"))

            user = await self.uow.users.get_by_email(invitation.email)
            is_new_account = user is None

            if is_new_account:
                if not password or len(password) < self.min_password_length:
                    return Return.err(
                        Error(
                            "INVALID_PASSWORD",
                            "Password is required for new accounts "
                            f"(min {self.min_password_length} characters)",
                            details={"requires_account_creation": True},
                        )
                    )

                password_hash = bcrypt.hashpw(
                    password.encode("utf-8"), bcrypt.gensalt(rounds=12)
                ).decode("utf-8")
                try:
                    user = await self.uow.users.create(
                        User(email=invitation.email, password_hash=password_hash)
                    )
                except IntegrityError as exc:
                    # A concurrent join created the account first
                    if not is_unique_violation(exc):
                        raise
                    logger.info(
                        "Account for invitation %s created concurrently", invitation.id
                    )
                    return Return.err(
                        Error(
                            "INVITATION_ALREADY_CLAIMED",
                            "Invitation has already been used",
                        )
                    )
            else:
                if user.id == tenant.owner_user_id:
                    return Return.err(
                        Error("ALREADY_MEMBER", "You are already a member of this workspace")
                    )
                existing_membership = await self.uow.memberships.get_by_user_and_tenant(
                    user.id, tenant.id
                )
                if (
                    existing_membership is not None
                    and existing_membership.status == MembershipStatus.active
                ):
                    return Return.err(
                        Error("ALREADY_MEMBER", "You are already a member of this workspace")
                    )

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

            claimed = await self.uow.invitations.claim(invitation.id, user.id, now)
            if not claimed:
                return Return.err(
                    Error("INVITATION_ALREADY_CLAIMED", "Invitation has already been used")
                )

            await self.uow.memberships.upsert_active(
                tenant_id=tenant.id,
                user_id=user.id,
                role=invitation.role,
                invited_by=invitation.invited_by,
                joined_at=now,
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user.id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "is_new_user": is_new_account,
                        "role": invitation.role.value,
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
                            f"as {invitation.role.label}"
                        ),
                    )
                )

            response = JoinWorkspaceResponse(
                success=True,
                tenant_id=str(tenant.id),
                user_id=str(user.id),
                role=invitation.role.value,
                is_new_account=is_new_account,
                access_token=generate_jwt(user.id),
            )

            await self.uow.commit()

            logger.info(
                "User %s joined tenant %s as %s (new account: %s)",
                response.user_id,
                response.tenant_id,
                response.role,
                is_new_account,
            )

            return Return.ok(response)

    async def _find_pending(
        self, token: Optional[str], code: Optional[str], email: Optional[str]
    ) -> Optional[Invitation]:
        if token:
            return await self.uow.invitations.get_by_token(token, pending_only=True)
        return await self.uow.invitations.get_by_code_and_email(
            code, email, pending_only=True
        )
