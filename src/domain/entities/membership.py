"""
Membership Entity

Links a User to a Tenant with a role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import MembershipRole, MembershipStatus


class Membership(SQLModel, table=True):
    """
    Membership entity - one user's relationship to one tenant.

    Business Rules:
    - (tenant_id, user_id) is unique, so at most one active row per pair
    - Removal is a soft delete (status=removed); a later join reactivates the row
    - A row with role=owner is immutable
    - A member added directly without an account is pending, has no user_id,
      and carries a password setup token until the account is created
    """

    __tablename__ = "tenant_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)

    role: MembershipRole = Field(default=MembershipRole.general_manager)
    status: MembershipStatus = Field(default=MembershipStatus.pending)

    # Directly added members
    email: Optional[str] = Field(default=None, max_length=255)
    member_name: Optional[str] = Field(default=None, max_length=255)
    password_setup_token: Optional[str] = Field(
        default=None, unique=True, max_length=255
    )
    password_set_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    email_notification_sent_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    invited_by: Optional[UUID] = Field(default=None)

    # Timestamps
    invited_at: Optional[datetime] = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_members_tenant_user", "tenant_id", "user_id", unique=True),
        Index("idx_tenant_members_status", "status"),
        Index("idx_tenant_members_tenant_email", "tenant_id", "email"),
    )

    @property
    def password_pending(self) -> bool:
        return self.password_setup_token is not None and self.password_set_at is None
