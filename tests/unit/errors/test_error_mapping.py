import pytest

from src.api.error import ClientError, ServerError, raise_for_error
from src.libs.result import Error, Return


@pytest.mark.parametrize(
    "code, status_code",
    [
        ("MISSING_CREDENTIALS", 401),
        ("INSUFFICIENT_ROLE", 403),
        ("MEMBER_NOT_FOUND", 404),
        ("CANNOT_MODIFY_OWNER", 400),
        ("MEMBER_LIMIT_REACHED", 400),
        ("INVITATION_ALREADY_CLAIMED", 409),
    ],
)
def test_client_errors_map_to_status(code, status_code):
    with pytest.raises(ClientError) as exc_info:
        raise_for_error(Error(code, "message"))

    assert exc_info.value.status_code == status_code
    assert exc_info.value.base_error.code == code


def test_unknown_codes_are_server_errors():
    with pytest.raises(ServerError):
        raise_for_error(Error("DATABASE_DOWN", "connection refused"))


def test_result_accessors():
    ok = Return.ok(5)
    err = Return.err(Error("X", "boom", details={"limit": 3}))

    assert ok.is_ok() and ok.value == 5
    assert err.is_err() and err.error.details == {"limit": 3}
    with pytest.raises(ValueError):
        err.value
    with pytest.raises(ValueError):
        ok.error
