"""
Invitation Entity

Time-boxed offer to join a tenant, redeemable by token or by code + email.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import InvitationStatus, MembershipRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - outstanding offer to join a tenant.

    Business Rules:
    - Created by the tenant owner, never for the owner role
    - Expires 7 days after issue (resend extends it)
    - Token is full-entropy and used in links; code is 8 upper-case hex chars
    - At most one pending, unexpired invitation per (tenant, email)
    - accepted, expired and cancelled are terminal
    """

    __tablename__ = "member_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(default=MembershipRole.general_manager)
    invitation_token: str = Field(unique=True, index=True, max_length=64)
    invitation_code: str = Field(index=True, max_length=8)

    invited_by: UUID = Field(nullable=False)
    status: InvitationStatus = Field(default=InvitationStatus.pending)

    email_sent: bool = Field(default=False)
    email_sent_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    accepted_by_user_id: Optional[UUID] = Field(default=None)
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    invited_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_tenant_email", "tenant_id", "email"),
        Index("idx_invitation_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now
