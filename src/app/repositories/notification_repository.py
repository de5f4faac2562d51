from abc import ABC, abstractmethod

from src.domain.entities import MemberNotification


class INotificationRepository(ABC):
    """MemberNotification repository interface - application layer"""

    @abstractmethod
    async def create(self, notification: MemberNotification) -> MemberNotification:
        """Create a new member notification"""
        pass
