"""
Membership Use Case DTOs (Data Transfer Objects)

Response classes for the membership domain.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Directory lookups
# ============================================================================


@dataclass(frozen=True)
class UserProfile:
    """Display fields fetched from the user directory"""

    email: str
    name: Optional[str]
    avatar_url: Optional[str]


UNKNOWN_PROFILE = UserProfile(email="Unknown", name=None, avatar_url=None)


# ============================================================================
# Response DTOs
# ============================================================================


class MembershipContextResponse(BaseModel):
    """Response for GET /members/me"""

    user_id: str
    tenant_id: str
    tenant_name: str
    role: str
    max_team_members: int


class MemberInfo(BaseModel):
    """Team member entry in the member list"""

    id: str
    user_id: Optional[str] = None
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    status: str
    password_pending: bool = False
    invited_at: Optional[str] = None
    joined_at: Optional[str] = None


class ListMembersResponse(BaseModel):
    """Response for list members use case"""

    members: List[MemberInfo]
    total: int
    max_members: int


class ChangeRoleResponse(BaseModel):
    """Response for change role use case"""

    success: bool
    message: str
    new_role: str


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    success: bool
    message: str


class AddedMemberInfo(BaseModel):
    """Member entry returned after a direct add"""

    id: str
    email: str
    name: str
    role: str
    password_pending: bool


class AddMemberResponse(BaseModel):
    """Response for add member use case"""

    success: bool
    member: AddedMemberInfo


class SendSetupNotificationResponse(BaseModel):
    """Response for send setup notification use case"""

    success: bool
    message: str
    setup_link: str
    member_email: Optional[str] = None
    member_name: Optional[str] = None


class SetupPreviewResponse(BaseModel):
    """Public preview of a password setup token"""

    valid: bool
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    tenant_name: str
    tenant_logo: Optional[str] = None


class CompleteSetupResponse(BaseModel):
    """Response for complete setup use case"""

    success: bool
    message: str
    user_id: str
    tenant_id: str
    email: str
    access_token: str
