from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id_and_tenant(
        self, invitation_id: UUID, tenant_id: UUID
    ) -> Optional[Invitation]:
        """Get invitation by ID scoped to a tenant"""
        pass

    @abstractmethod
    async def get_by_token(
        self, token: str, pending_only: bool = False
    ) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_by_code_and_email(
        self, code: str, email: str, pending_only: bool = False
    ) -> Optional[Invitation]:
        """Get the newest invitation matching code (upper-case) and email (case-insensitive)"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by tenant and email"""
        pass

    @abstractmethod
    async def list_pending_by_tenant(self, tenant_id: UUID) -> List[Invitation]:
        """List pending invitations for a tenant, newest first"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def cancel_pending(self, invitation_id: UUID, tenant_id: UUID) -> int:
        """Move a pending invitation to cancelled; returns affected row count"""
        pass

    @abstractmethod
    async def claim(
        self, invitation_id: UUID, user_id: UUID, accepted_at: datetime
    ) -> bool:
        """Conditionally mark a pending invitation accepted; False if already claimed"""
        pass
