import logging

from src.app.services.invitation_mailer import InvitationMailer
from src.domain.entities import Invitation, Membership, Tenant

logger = logging.getLogger(__name__)


class LoggingInvitationMailer(InvitationMailer):
    """
    Mailer that records the invitation link in the application log.

    Stands in for a transactional email provider; the owner can still share
    the code or setup link manually from the dashboard.
    """

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url.rstrip("/")

    def join_link(self, invitation: Invitation) -> str:
        return f"{self.frontend_url}/join?token={invitation.invitation_token}"

    def setup_link(self, membership: Membership) -> str:
        return f"{self.frontend_url}/setup-password?token={membership.password_setup_token}"

    async def send_invitation(self, invitation: Invitation, tenant: Tenant) -> None:
        logger.info(
            "Invitation email to %s for workspace %s (%s): %s code=%s",
            invitation.email,
            tenant.display_name,
            invitation.role.value,
            self.join_link(invitation),
            invitation.invitation_code,
        )

    async def send_setup_link(self, membership: Membership, tenant: Tenant) -> None:
        logger.info(
            "Setup email to %s for workspace %s (%s): %s",
            membership.email,
            tenant.display_name,
            membership.role.value,
            self.setup_link(membership),
        )
