from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.base import utcnow
from src.domain.entities import Membership, MembershipRole, MembershipStatus


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and tenant, whatever its status"""
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get the active membership for a user within a tenant"""
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.tenant_id == tenant_id,
            Membership.status == MembershipStatus.active,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's active membership in any tenant"""
        stmt = (
            select(Membership)
            .where(
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.active,
            )
            .order_by(Membership.joined_at.asc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_tenant(
        self, tenant_id: UUID, statuses: Sequence[MembershipStatus]
    ) -> List[Membership]:
        """List memberships with the given statuses, joined_at ascending, nulls last"""
        stmt = (
            select(Membership)
            .where(
                Membership.tenant_id == tenant_id,
                Membership.status.in_(list(statuses)),
            )
            .order_by(Membership.joined_at.is_(None), Membership.joined_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active_non_owner(self, tenant_id: UUID) -> int:
        """Count active memberships whose role is not owner"""
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(
                Membership.tenant_id == tenant_id,
                Membership.status == MembershipStatus.active,
                Membership.role != MembershipRole.owner,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        membership.updated_at = utcnow()
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def upsert_active(
        self,
        tenant_id: UUID,
        user_id: UUID,
        role: MembershipRole,
        invited_by: Optional[UUID],
        joined_at: datetime,
    ) -> Membership:
        """Insert an active membership or reactivate the existing (tenant, user) row"""
        membership = await self.get_by_user_and_tenant(user_id, tenant_id)
        if membership is None:
            return await self.create(
                Membership(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    role=role,
                    status=MembershipStatus.active,
                    invited_by=invited_by,
                    joined_at=joined_at,
                )
            )

        # Reactivation resets the role to the invited one
        membership.status = MembershipStatus.active
        membership.role = role
        membership.joined_at = joined_at
        return await self.update(membership)

    async def get_by_id_and_tenant(
        self, membership_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get a membership row scoped to a tenant"""
        stmt = select(Membership).where(
            Membership.id == membership_id, Membership.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Membership]:
        """Get a pending, directly added membership by email (case-insensitive)"""
        stmt = select(Membership).where(
            Membership.tenant_id == tenant_id,
            func.lower(Membership.email) == email.strip().lower(),
            Membership.status == MembershipStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_setup_token(self, token: str) -> Optional[Membership]:
        """Get the membership holding a password setup token"""
        stmt = select(Membership).where(Membership.password_setup_token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def count_non_owner(
        self, tenant_id: UUID, statuses: Sequence[MembershipStatus]
    ) -> int:
        """Count non-owner memberships with the given statuses"""
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(
                Membership.tenant_id == tenant_id,
                Membership.status.in_(list(statuses)),
                Membership.role != MembershipRole.owner,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def complete_setup(
        self, membership_id: UUID, token: str, user_id: UUID, completed_at: datetime
    ) -> bool:
        """Activate a pending membership if it still holds the setup token"""
        stmt = (
            update(Membership)
            .where(
                Membership.id == membership_id,
                Membership.password_setup_token == token,
                Membership.status == MembershipStatus.pending,
            )
            .values(
                user_id=user_id,
                status=MembershipStatus.active,
                password_setup_token=None,
                password_set_at=completed_at,
                joined_at=completed_at,
                updated_at=completed_at,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
