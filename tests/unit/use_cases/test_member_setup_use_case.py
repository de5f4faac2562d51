from uuid import uuid4

import bcrypt
import pytest
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import user_id_from_token
from src.app.use_cases.members import (
    CompleteSetupUseCase,
    SendSetupNotificationUseCase,
    ValidateSetupTokenUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    NotificationType,
    User,
)


@pytest.fixture
def pending_member(tenant):
    return Membership(
        id=uuid4(),
        tenant_id=tenant.id,
        email="dana@x.com",
        member_name="Dana Scott",
        role=MembershipRole.accountant,
        status=MembershipStatus.pending,
        password_setup_token="setup-token",
    )


@pytest.fixture
def setup_uow(mock_uow, tenant, pending_member):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.memberships.get_by_setup_token.return_value = pending_member
    mock_uow.memberships.get_by_id_and_tenant.return_value = pending_member
    return mock_uow


# ============================================================================
# Send setup notification
# ============================================================================


@pytest.mark.asyncio
async def test_owner_sends_setup_link(setup_uow, mock_mailer, owner_context, pending_member):
    result = await SendSetupNotificationUseCase(setup_uow, mock_mailer).execute(
        owner_context, pending_member.id
    )

    assert result.is_ok()
    response = result.value
    assert response.message == "Notification sent"
    assert response.setup_link == "http://frontend.test/setup-password?token=setup-token"
    assert response.member_email == "dana@x.com"
    assert response.member_name == "Dana Scott"
    assert pending_member.email_notification_sent_at is not None
    setup_uow.commit.assert_called_once()
    mock_mailer.send_setup_link.assert_called_once()


@pytest.mark.asyncio
async def test_setup_link_requires_owner(setup_uow, mock_mailer, manager_context, pending_member):
    result = await SendSetupNotificationUseCase(setup_uow, mock_mailer).execute(
        manager_context, pending_member.id
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_mailer.send_setup_link.assert_not_called()


@pytest.mark.asyncio
async def test_setup_link_for_unknown_member(mock_uow, mock_mailer, owner_context):
    result = await SendSetupNotificationUseCase(mock_uow, mock_mailer).execute(
        owner_context, uuid4()
    )

    assert result.is_err()
    assert result.error.code == "MEMBER_NOT_FOUND"


@pytest.mark.asyncio
async def test_no_setup_link_after_password_is_set(
    setup_uow, mock_mailer, owner_context, pending_member
):
    pending_member.password_set_at = utcnow()

    result = await SendSetupNotificationUseCase(setup_uow, mock_mailer).execute(
        owner_context, pending_member.id
    )

    assert result.is_err()
    assert result.error.code == "SETUP_ALREADY_COMPLETED"
    assert result.error.message == "Member has already set their password"


# ============================================================================
# Validate setup token
# ============================================================================


@pytest.mark.asyncio
async def test_setup_token_preview(setup_uow):
    result = await ValidateSetupTokenUseCase(setup_uow).execute("setup-token")

    assert result.is_ok()
    preview = result.value
    assert preview.valid is True
    assert preview.email == "dana@x.com"
    assert preview.name == "Dana Scott"
    assert preview.role == "accountant"
    assert preview.tenant_name == "Sunset Rentals"


@pytest.mark.asyncio
async def test_unknown_setup_token(mock_uow):
    result = await ValidateSetupTokenUseCase(mock_uow).execute("nope")

    assert result.is_err()
    assert result.error.code == "SETUP_TOKEN_NOT_FOUND"
    assert result.error.message == "Invalid or expired token"


# ============================================================================
# Complete setup
# ============================================================================


@pytest.mark.asyncio
async def test_setup_creates_account_and_activates(setup_uow, tenant, pending_member):
    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", "longenough")

    assert result.is_ok()
    response = result.value
    assert response.message == "Account created successfully"
    assert response.tenant_id == str(tenant.id)
    assert response.email == "dana@x.com"
    assert str(user_id_from_token(response.access_token)) == response.user_id

    user = setup_uow.users.create.call_args.args[0]
    assert user.first_name == "Dana"
    assert user.last_name == "Scott"
    assert bcrypt.checkpw(b"longenough", user.password_hash.encode("utf-8"))

    args = setup_uow.memberships.complete_setup.call_args.args
    assert args[0] == pending_member.id
    assert args[1] == "setup-token"
    assert args[2] == user.id

    notification = setup_uow.notifications.create.call_args.args[0]
    assert notification.user_id == tenant.owner_user_id
    assert notification.type == NotificationType.member_joined
    assert notification.message == "Dana Scott joined the team as Accountant"
    setup_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("password", [None, "", "short"])
async def test_setup_password_length(setup_uow, password):
    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", password)

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    assert result.error.message == "Password must be at least 8 characters"
    setup_uow.memberships.get_by_setup_token.assert_not_called()


@pytest.mark.asyncio
async def test_setup_with_unknown_token(mock_uow):
    result = await CompleteSetupUseCase(mock_uow).execute("nope", "longenough")

    assert result.is_err()
    assert result.error.code == "SETUP_TOKEN_NOT_FOUND"
    assert result.error.message == "Invalid token"


@pytest.mark.asyncio
async def test_setup_rejects_existing_account(setup_uow):
    setup_uow.users.get_by_email.return_value = User(
        id=uuid4(), email="dana@x.com", password_hash="x"
    )

    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", "longenough")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_EXISTS"
    setup_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_setup_rechecks_team_limit(setup_uow):
    setup_uow.memberships.count_active_non_owner.return_value = 3

    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", "longenough")

    assert result.is_err()
    assert result.error.code == "MEMBER_LIMIT_REACHED"
    setup_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_account_creation_is_reported(setup_uow):
    setup_uow.users.create.side_effect = IntegrityError(
        "INSERT INTO users ...", {}, Exception("UNIQUE constraint failed: users.email")
    )

    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", "longenough")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_EXISTS"
    setup_uow.memberships.complete_setup.assert_not_called()
    setup_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lost_setup_race_is_a_conflict(setup_uow):
    setup_uow.memberships.complete_setup.return_value = False

    result = await CompleteSetupUseCase(setup_uow).execute("setup-token", "longenough")

    assert result.is_err()
    assert result.error.code == "SETUP_ALREADY_CLAIMED"
    setup_uow.commit.assert_not_called()
