from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.notification_repository import INotificationRepository
from src.domain.entities import MemberNotification


class NotificationRepository(INotificationRepository):
    """MemberNotification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: MemberNotification) -> MemberNotification:
        """Create a new member notification"""
        self.session.add(notification)
        await self.session.flush()
        return notification
