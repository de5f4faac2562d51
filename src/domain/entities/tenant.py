"""
Tenant Entity

Represents one property-management workspace.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

DEFAULT_MAX_TEAM_MEMBERS = 3


class Tenant(SQLModel, table=True):
    """
    Tenant entity - one workspace/business.

    Business Rules:
    - Created at signup, read-only for team management
    - The owner is implicit (owner_user_id), not a membership row
    - max_team_members excludes the owner; unset means 3
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    business_name: Optional[str] = Field(default=None, max_length=255)
    logo_url: Optional[str] = Field(default=None, max_length=500)

    owner_user_id: Optional[UUID] = Field(default=None)
    max_team_members: Optional[int] = Field(default=DEFAULT_MAX_TEAM_MEMBERS)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_tenant_owner_user_id", "owner_user_id"),)

    @property
    def display_name(self) -> str:
        return self.business_name or self.name or "Workspace"

    @property
    def team_limit(self) -> int:
        return self.max_team_members or DEFAULT_MAX_TEAM_MEMBERS
