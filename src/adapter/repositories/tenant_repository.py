from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import Tenant


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_owner_user_id(self, user_id: UUID) -> Optional[Tenant]:
        """Get the tenant owned by a user"""
        stmt = (
            select(Tenant)
            .where(Tenant.owner_user_id == user_id)
            .order_by(Tenant.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return result.first()
