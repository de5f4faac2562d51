from typing import List

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.seed import auth_headers, create_tenant, create_user
from src.depends import get_invitation_mailer, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.invitation_mailer import InvitationMailer
from src.domain.entities import Invitation, Membership, Tenant


class RecordingMailer(InvitationMailer):
    """Keeps delivered invitations and setup links in memory"""

    def __init__(self):
        self.sent: List[dict] = []
        self.setup_links: List[dict] = []

    def setup_link(self, membership: Membership) -> str:
        return f"http://frontend.test/setup-password?token={membership.password_setup_token}"

    async def send_setup_link(self, membership: Membership, tenant: Tenant) -> None:
        self.setup_links.append(
            {"email": membership.email, "link": self.setup_link(membership)}
        )

    async def send_invitation(self, invitation: Invitation, tenant: Tenant) -> None:
        self.sent.append(
            {
                "email": invitation.email,
                "code": invitation.invitation_code,
                "token": invitation.invitation_token,
                "tenant": tenant.display_name,
            }
        )


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def mailer():
    return RecordingMailer()


@pytest_asyncio.fixture
async def client(db_session, mailer):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_invitation_mailer] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def workspace(db_session, test_data):
    """Owner with a tenant and no team yet"""
    owner = test_data.get_copy("owner")
    tenant = test_data.get_copy("tenant")

    owner_id = await create_user(
        db_session,
        owner["email"],
        password=owner["password"],
        first_name=owner["first_name"],
        last_name=owner["last_name"],
    )
    tenant_id = await create_tenant(db_session, owner_id, **tenant)

    return {
        "owner_id": owner_id,
        "tenant_id": tenant_id,
        "owner_headers": auth_headers(owner_id),
    }
