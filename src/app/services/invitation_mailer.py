from abc import ABC, abstractmethod

from src.domain.entities import Invitation, Membership, Tenant


class InvitationMailer(ABC):
    """Delivers invitation emails - application layer"""

    @abstractmethod
    async def send_invitation(self, invitation: Invitation, tenant: Tenant) -> None:
        """Send the invitation link and code to the invitee"""
        pass

    @abstractmethod
    def setup_link(self, membership: Membership) -> str:
        """Password setup URL for a directly added member"""
        pass

    @abstractmethod
    async def send_setup_link(self, membership: Membership, tenant: Tenant) -> None:
        """Send the password setup link to a directly added member"""
        pass
