from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import MembershipRole, Tenant
from tests.fixtures.contexts import context_for


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock(return_value=None)
    uow.tenants.get_by_owner_user_id = AsyncMock(return_value=None)

    uow.memberships = MagicMock()
    uow.memberships.get_by_user_and_tenant = AsyncMock(return_value=None)
    uow.memberships.get_active_by_user_and_tenant = AsyncMock(return_value=None)
    uow.memberships.get_active_by_user_id = AsyncMock(return_value=None)
    uow.memberships.list_by_tenant = AsyncMock(return_value=[])
    uow.memberships.count_active_non_owner = AsyncMock(return_value=0)
    uow.memberships.update = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.upsert_active = AsyncMock()
    uow.memberships.create = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.get_by_id_and_tenant = AsyncMock(return_value=None)
    uow.memberships.get_pending_by_tenant_and_email = AsyncMock(return_value=None)
    uow.memberships.get_by_setup_token = AsyncMock(return_value=None)
    uow.memberships.count_non_owner = AsyncMock(return_value=0)
    uow.memberships.complete_setup = AsyncMock(return_value=True)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id_and_tenant = AsyncMock(return_value=None)
    uow.invitations.get_by_token = AsyncMock(return_value=None)
    uow.invitations.get_by_code_and_email = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_tenant_and_email = AsyncMock(return_value=None)
    uow.invitations.list_pending_by_tenant = AsyncMock(return_value=[])
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.update = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.cancel_pending = AsyncMock(return_value=1)
    uow.invitations.claim = AsyncMock(return_value=True)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    uow.notifications = MagicMock()
    uow.notifications.create = AsyncMock()
    return uow


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send_invitation = AsyncMock()
    mailer.send_setup_link = AsyncMock()
    mailer.setup_link = MagicMock(
        return_value="http://frontend.test/setup-password?token=setup-token"
    )
    return mailer


@pytest.fixture
def tenant():
    return Tenant(
        id=uuid4(),
        name="sunset",
        business_name="Sunset Rentals",
        owner_user_id=uuid4(),
        max_team_members=3,
    )


@pytest.fixture
def owner_context(tenant):
    return context_for(tenant, MembershipRole.owner)


@pytest.fixture
def manager_context(tenant):
    return context_for(tenant, MembershipRole.general_manager)


@pytest.fixture
def accountant_context(tenant):
    return context_for(tenant, MembershipRole.accountant)
