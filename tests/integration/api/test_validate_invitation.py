import pytest
from datetime import timedelta
from httpx import AsyncClient

from src.domain.base import utcnow
from src.domain.entities import InvitationStatus, MembershipRole
from tests.fixtures.seed import add_invitation


@pytest.mark.asyncio
async def test_validate_by_token(client: AsyncClient, db_session, workspace):
    invitation = await add_invitation(
        db_session,
        workspace["tenant_id"],
        "a@x.com",
        workspace["owner_id"],
        role=MembershipRole.accountant,
    )

    response = await client.get(f"/members/invitation/{invitation['token']}")

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "email": "a@x.com",
        "role": "accountant",
        "tenant_id": str(workspace["tenant_id"]),
        "tenant_name": "Sunset Rentals",
        "tenant_logo": "https://cdn.example.com/sunset.png",
    }


@pytest.mark.asyncio
async def test_validate_by_code_is_case_insensitive(client: AsyncClient, db_session, workspace):
    invitation = await add_invitation(
        db_session, workspace["tenant_id"], "a@x.com", workspace["owner_id"]
    )

    response = await client.get(
        f"/members/invitation/code/{invitation['code'].lower()}",
        params={"email": "A@X.COM"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == "a@x.com"


@pytest.mark.asyncio
async def test_validate_by_code_requires_email(client: AsyncClient):
    response = await client.get("/members/invitation/code/ABCDEF12")

    assert response.status_code == 400
    assert response.json() == {"error": "Email is required", "code": "MISSING_EMAIL"}


@pytest.mark.asyncio
async def test_unknown_references(client: AsyncClient):
    response = await client.get("/members/invitation/unknown-token")
    assert response.status_code == 404
    assert response.json()["error"] == "Invalid invitation"

    response = await client.get(
        "/members/invitation/code/ABCDEF12", params={"email": "a@x.com"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Invalid code or email"


@pytest.mark.asyncio
async def test_settled_invitation(client: AsyncClient, db_session, workspace):
    invitation = await add_invitation(
        db_session,
        workspace["tenant_id"],
        "a@x.com",
        workspace["owner_id"],
        status=InvitationStatus.accepted,
    )

    response = await client.get(f"/members/invitation/{invitation['token']}")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Invitation has been accepted",
        "code": "INVITATION_NOT_PENDING",
        "status": "accepted",
    }


@pytest.mark.asyncio
async def test_stale_invitation_stays_pending(client: AsyncClient, db_session, workspace):
    invitation = await add_invitation(
        db_session,
        workspace["tenant_id"],
        "a@x.com",
        workspace["owner_id"],
        expires_at=utcnow() - timedelta(minutes=5),
    )

    for _ in range(2):
        response = await client.get(f"/members/invitation/{invitation['token']}")
        assert response.status_code == 400
        assert response.json()["error"] == "Invitation has expired"
