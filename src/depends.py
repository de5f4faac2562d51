from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.invitation_mailer import LoggingInvitationMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.app.services.invitation_mailer import InvitationMailer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.members import ResolveWorkspaceUseCase
from src.domain.entities import WorkspaceContext
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Missing headers are answered in the service's own error shape
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_invitation_mailer() -> InvitationMailer:
    return LoggingInvitationMailer(ApplicationConfig.FRONTEND_URL)


async def get_workspace_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> WorkspaceContext:
    """
    Dependency resolving the bearer token to the caller's workspace.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        WorkspaceContext with tenant and role set

    Raises:
        ClientError: 401 if the credential is missing, invalid or the user
            is unknown; 404 if the user has no workspace
    """
    token = credentials.credentials if credentials else None

    result = await ResolveWorkspaceUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)

    context = result.value
    if not context.has_workspace:
        raise ClientError(
            Error("NO_WORKSPACE", "No workspace found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return context
