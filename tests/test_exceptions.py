import pytest

from smartq.exceptions import (
    APIError,
    CapacityExceededError,
    DuplicateMembershipError,
    InvalidStatusTransitionError,
    NotFoundError,
    PermissionDeniedError,
    QueueClosedError,
)


@pytest.mark.parametrize("exc_class, status_code", [
    (NotFoundError, 404),
    (CapacityExceededError, 400),
    (DuplicateMembershipError, 409),
    (QueueClosedError, 400),
    (InvalidStatusTransitionError, 409),
    (PermissionDeniedError, 403),
])
def test_default_status_codes(exc_class, status_code):
    exc = exc_class()
    assert isinstance(exc, APIError)
    assert exc.status_code == status_code
    assert str(exc) == exc.message


def test_capacity_message():
    assert CapacityExceededError().message == "Queue is full"


def test_custom_message():
    exc = NotFoundError("Queue not found")
    assert exc.message == "Queue not found"
    assert exc.status_code == 404


def test_base_defaults_to_server_error():
    assert APIError("boom").status_code == 500
