from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Membership, MembershipRole, MembershipStatus


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and tenant, whatever its status"""
        pass

    @abstractmethod
    async def get_active_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get the active membership for a user within a tenant"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's active membership in any tenant"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self, tenant_id: UUID, statuses: Sequence[MembershipStatus]
    ) -> List[Membership]:
        """List memberships with the given statuses, joined_at ascending, nulls last"""
        pass

    @abstractmethod
    async def count_active_non_owner(self, tenant_id: UUID) -> int:
        """Count active memberships whose role is not owner"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def upsert_active(
        self,
        tenant_id: UUID,
        user_id: UUID,
        role: MembershipRole,
        invited_by: Optional[UUID],
        joined_at: datetime,
    ) -> Membership:
        """Insert an active membership or reactivate the existing (tenant, user) row"""
        pass

    @abstractmethod
    async def get_by_id_and_tenant(
        self, membership_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get a membership row scoped to a tenant"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Membership]:
        """Get a pending, directly added membership by email (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_setup_token(self, token: str) -> Optional[Membership]:
        """Get the membership holding a password setup token"""
        pass

    @abstractmethod
    async def count_non_owner(
        self, tenant_id: UUID, statuses: Sequence[MembershipStatus]
    ) -> int:
        """Count non-owner memberships with the given statuses"""
        pass

    @abstractmethod
    async def complete_setup(
        self, membership_id: UUID, token: str, user_id: UUID, completed_at: datetime
    ) -> bool:
        """
        Activate a pending membership if it still holds the setup token.

        Returns False when another request completed the setup first.
        """
        pass
