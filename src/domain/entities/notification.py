"""
MemberNotification Entity

In-app notifications for workspace members.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import NotificationType


class MemberNotification(SQLModel, table=True):
    """
    MemberNotification entity - message shown to a member in the dashboard.

    Business Rules:
    - Addressed to one user within one tenant
    - Written in the same transaction as the change it reports
    """

    __tablename__ = "member_notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: UUID = Field(nullable=False, index=True)

    type: NotificationType = Field(nullable=False)
    title: str = Field(max_length=255)
    message: str = Field(max_length=1000)
    read: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_member_notifications_user_read", "user_id", "read"),)
