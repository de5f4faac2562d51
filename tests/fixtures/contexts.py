from typing import Optional
from uuid import UUID, uuid4

from src.domain.entities import MembershipRole, Tenant, WorkspaceContext


def context_for(
    tenant: Tenant, role: MembershipRole, user_id: Optional[UUID] = None
) -> WorkspaceContext:
    """Resolved caller for a tenant; owners always act as tenant.owner_user_id"""
    if role == MembershipRole.owner:
        user_id = tenant.owner_user_id
    return WorkspaceContext(
        user_id=user_id or uuid4(),
        email="caller@example.com",
        tenant_id=tenant.id,
        tenant_name=tenant.display_name,
        role=role,
        max_team_members=tenant.team_limit,
    )
