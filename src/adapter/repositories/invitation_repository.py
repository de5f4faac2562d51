from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id_and_tenant(
        self, invitation_id: UUID, tenant_id: UUID
    ) -> Optional[Invitation]:
        """Get invitation by ID scoped to a tenant"""
        stmt = select(Invitation).where(
            Invitation.id == invitation_id, Invitation.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(
        self, token: str, pending_only: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by token"""
        stmt = select(Invitation).where(Invitation.invitation_token == token)
        if pending_only:
            stmt = stmt.where(Invitation.status == InvitationStatus.pending)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code_and_email(
        self, code: str, email: str, pending_only: bool = False
    ) -> Optional[Invitation]:
        """Get the newest invitation matching code (upper-case) and email (case-insensitive)"""
        stmt = select(Invitation).where(
            Invitation.invitation_code == code.strip().upper(),
            func.lower(Invitation.email) == email.strip().lower(),
        )
        if pending_only:
            stmt = stmt.where(Invitation.status == InvitationStatus.pending)
        stmt = stmt.order_by(Invitation.invited_at.desc())
        result = await self.session.exec(stmt)
        return result.first()

    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by tenant and email"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.tenant_id == tenant_id,
                func.lower(Invitation.email) == email.strip().lower(),
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.invited_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_pending_by_tenant(self, tenant_id: UUID) -> List[Invitation]:
        """List pending invitations for a tenant, newest first"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.tenant_id == tenant_id,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.invited_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        invitation.email = invitation.email.strip().lower()
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def cancel_pending(self, invitation_id: UUID, tenant_id: UUID) -> int:
        """Move a pending invitation to cancelled; returns affected row count"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.tenant_id == tenant_id,
                Invitation.status == InvitationStatus.pending,
            )
            .values(status=InvitationStatus.cancelled)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def claim(
        self, invitation_id: UUID, user_id: UUID, accepted_at: datetime
    ) -> bool:
        """Conditionally mark a pending invitation accepted; False if already claimed"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.status == InvitationStatus.pending,
            )
            .values(
                status=InvitationStatus.accepted,
                accepted_at=accepted_at,
                accepted_by_user_id=user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
