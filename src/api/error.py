from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Use case error codes that are the caller's fault
CLIENT_ERROR_STATUS = {
    # Unauthorized
    "MISSING_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "USER_NOT_FOUND": status.HTTP_401_UNAUTHORIZED,
    # Forbidden
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    # Not found
    "NO_WORKSPACE": status.HTTP_404_NOT_FOUND,
    "MEMBER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SETUP_TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # Invalid input
    "INVALID_EMAIL": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_NAME": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "MISSING_EMAIL": status.HTTP_400_BAD_REQUEST,
    "MISSING_INVITATION_REFERENCE": status.HTTP_400_BAD_REQUEST,
    "CANNOT_MODIFY_SELF": status.HTTP_400_BAD_REQUEST,
    "CANNOT_MODIFY_OWNER": status.HTTP_400_BAD_REQUEST,
    # Conflicts the clients expect as 400
    "MEMBER_LIMIT_REACHED": status.HTTP_400_BAD_REQUEST,
    "INVITATION_ALREADY_PENDING": status.HTTP_400_BAD_REQUEST,
    "ALREADY_MEMBER": status.HTTP_400_BAD_REQUEST,
    "INVITATION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "INVITATION_NOT_PENDING": status.HTTP_400_BAD_REQUEST,
    "SETUP_ALREADY_COMPLETED": status.HTTP_400_BAD_REQUEST,
    "ACCOUNT_EXISTS": status.HTTP_400_BAD_REQUEST,
    # Lost the race for an invitation or setup link
    "INVITATION_ALREADY_CLAIMED": status.HTTP_409_CONFLICT,
    "SETUP_ALREADY_CLAIMED": status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise the HTTP exception matching a use case error"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
