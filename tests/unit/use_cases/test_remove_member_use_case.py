from uuid import uuid4

import pytest

from src.app.use_cases.members import RemoveMemberUseCase
from src.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    NotificationType,
    WorkspaceContext,
)


@pytest.fixture
def target(tenant):
    return Membership(
        id=uuid4(),
        tenant_id=tenant.id,
        user_id=uuid4(),
        role=MembershipRole.general_manager,
        status=MembershipStatus.active,
    )


@pytest.mark.asyncio
async def test_owner_removes_member(mock_uow, owner_context, tenant, target):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.memberships.get_active_by_user_and_tenant.return_value = target

    result = await RemoveMemberUseCase(mock_uow).execute(owner_context, target.user_id)

    assert result.is_ok()
    assert result.value.success is True
    assert result.value.message == "Member removed"

    # Soft delete keeps the row
    assert target.status == MembershipStatus.removed
    mock_uow.memberships.update.assert_called_once_with(target)

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "member_removed"
    assert audit.event_metadata["removed_user_id"] == str(target.user_id)

    notification = mock_uow.notifications.create.call_args.args[0]
    assert notification.type == NotificationType.member_removed
    assert notification.message == "You have been removed from the team"

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_accountant_cannot_remove_members(mock_uow, accountant_context, target):
    result = await RemoveMemberUseCase(mock_uow).execute(accountant_context, target.user_id)

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_owner_cannot_remove_self(mock_uow, owner_context):
    result = await RemoveMemberUseCase(mock_uow).execute(
        owner_context, owner_context.user_id
    )

    assert result.is_err()
    assert result.error.code == "CANNOT_MODIFY_SELF"
    assert result.error.message == "Cannot remove yourself from the workspace"


@pytest.mark.asyncio
async def test_tenant_owner_cannot_be_removed(mock_uow, tenant):
    # A stray owner-role membership row for the tenant owner
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.memberships.get_active_by_user_and_tenant.return_value = Membership(
        id=uuid4(),
        tenant_id=tenant.id,
        user_id=tenant.owner_user_id,
        role=MembershipRole.owner,
        status=MembershipStatus.active,
    )
    other_owner_context = WorkspaceContext(
        user_id=uuid4(),
        email="co-owner@example.com",
        tenant_id=tenant.id,
        tenant_name=tenant.display_name,
        role=MembershipRole.owner,
        max_team_members=3,
    )

    result = await RemoveMemberUseCase(mock_uow).execute(
        other_owner_context, tenant.owner_user_id
    )

    assert result.is_err()
    assert result.error.code == "CANNOT_MODIFY_OWNER"
    assert result.error.message == "Cannot remove the owner"


@pytest.mark.asyncio
async def test_missing_member_returns_not_found(mock_uow, owner_context, tenant):
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await RemoveMemberUseCase(mock_uow).execute(owner_context, uuid4())

    assert result.is_err()
    assert result.error.code == "MEMBER_NOT_FOUND"
    mock_uow.commit.assert_not_called()
