import re
from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.invitations import InviteMemberUseCase
from src.domain.base import utcnow
from src.domain.entities import (
    Invitation,
    InvitationStatus,
    Membership,
    MembershipRole,
    MembershipStatus,
    User,
)


@pytest.fixture
def use_case(mock_uow, mock_mailer, tenant):
    mock_uow.tenants.get_by_id.return_value = tenant
    return InviteMemberUseCase(mock_uow, mock_mailer)


def pending_invitation(tenant, email, expires_at):
    return Invitation(
        id=uuid4(),
        tenant_id=tenant.id,
        email=email,
        role=MembershipRole.accountant,
        invitation_token="token",
        invitation_code="ABCDEF12",
        invited_by=tenant.owner_user_id,
        status=InvitationStatus.pending,
        expires_at=expires_at,
    )


@pytest.mark.asyncio
async def test_owner_creates_invitation(use_case, mock_uow, mock_mailer, owner_context):
    result = await use_case.execute(owner_context, "New.Person@Example.com", "general_manager")

    assert result.is_ok()
    response = result.value
    assert response.message == "Invitation created. Share the code with the team member."

    invitation = response.invitation
    assert invitation.email == "new.person@example.com"
    assert invitation.role == "general_manager"
    assert invitation.status == "pending"
    assert re.fullmatch(r"[0-9A-F]{8}", invitation.invitation_code)
    assert len(invitation.invitation_token) >= 32

    created = mock_uow.invitations.create.call_args.args[0]
    assert created.invited_by == owner_context.user_id
    assert created.email_sent is False
    assert created.expires_at - created.invited_at == timedelta(days=7)

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "invitation_created"
    mock_mailer.send_invitation.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_send_email_uses_mailer(use_case, mock_uow, mock_mailer, owner_context):
    result = await use_case.execute(owner_context, "a@x.com", "accountant", send_email=True)

    assert result.is_ok()
    assert result.value.message == "Invitation sent via email"
    created = mock_uow.invitations.create.call_args.args[0]
    assert created.email_sent is True
    assert created.email_sent_at is not None
    mock_mailer.send_invitation.assert_called_once()


@pytest.mark.asyncio
async def test_general_manager_cannot_invite(use_case, manager_context):
    result = await use_case.execute(manager_context, "a@x.com", "accountant")

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "not-an-email"])
async def test_email_must_be_valid(use_case, owner_context, email):
    result = await use_case.execute(owner_context, email, "accountant")

    assert result.is_err()
    assert result.error.code == "INVALID_EMAIL"
    assert result.error.message == "Valid email is required"


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["owner", "viewer"])
async def test_role_must_be_invitable(use_case, owner_context, role):
    result = await use_case.execute(owner_context, "a@x.com", role)

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"
    assert result.error.message == "Invalid role. Must be general_manager or accountant"


@pytest.mark.asyncio
async def test_team_limit_blocks_invitation(use_case, mock_uow, owner_context):
    mock_uow.memberships.count_active_non_owner.return_value = 3

    result = await use_case.execute(owner_context, "a@x.com", "accountant")

    assert result.is_err()
    assert result.error.code == "MEMBER_LIMIT_REACHED"
    assert result.error.message == "Maximum team members reached (3)"
    assert result.error.details == {"limit": 3}
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_unset_team_limit_defaults_to_three(use_case, mock_uow, owner_context, tenant):
    tenant.max_team_members = None
    mock_uow.memberships.count_active_non_owner.return_value = 3

    result = await use_case.execute(owner_context, "a@x.com", "accountant")

    assert result.is_err()
    assert result.error.details == {"limit": 3}


@pytest.mark.asyncio
async def test_existing_member_cannot_be_invited(use_case, mock_uow, owner_context, tenant):
    user = User(id=uuid4(), email="a@x.com", password_hash="x")
    mock_uow.users.get_by_email.return_value = user
    mock_uow.memberships.get_active_by_user_and_tenant.return_value = Membership(
        tenant_id=tenant.id,
        user_id=user.id,
        role=MembershipRole.accountant,
        status=MembershipStatus.active,
    )

    result = await use_case.execute(owner_context, "A@x.com", "accountant")

    assert result.is_err()
    assert result.error.code == "ALREADY_MEMBER"
    assert result.error.message == "This user is already a team member"


@pytest.mark.asyncio
async def test_pending_invitation_blocks_duplicate(use_case, mock_uow, owner_context, tenant):
    existing = pending_invitation(tenant, "a@x.com", utcnow() + timedelta(days=2))
    mock_uow.invitations.get_pending_by_tenant_and_email.return_value = existing

    result = await use_case.execute(owner_context, "a@x.com", "accountant")

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_PENDING"
    assert result.error.details == {"invitation_id": str(existing.id)}
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_stale_pending_invitation_is_expired_and_replaced(
    use_case, mock_uow, owner_context, tenant
):
    stale = pending_invitation(tenant, "a@x.com", utcnow() - timedelta(minutes=1))
    mock_uow.invitations.get_pending_by_tenant_and_email.return_value = stale

    result = await use_case.execute(owner_context, "a@x.com", "accountant")

    assert result.is_ok()
    assert stale.status == InvitationStatus.expired
    mock_uow.invitations.update.assert_called_once_with(stale)
    mock_uow.invitations.create.assert_called_once()
