import pytest

from errandhub.services.auth_service import register_user, authenticate_user
from errandhub.services.user_service import (
    get_user,
    count_active_users,
    deactivate_user,
    update_user,
)
from errandhub.utils.exceptions import Conflict, Forbidden, NotFound


def test_deactivation_frees_email_and_hides_user(make_user) -> None:
    user = make_user(email="gone@example.com")
    other = make_user()

    assert deactivate_user(user.id) is True
    assert deactivate_user(user.id) is False
    assert count_active_users([user.id, other.id]) == 1

    with pytest.raises(NotFound):
        get_user(user.id)
    with pytest.raises(Forbidden):
        authenticate_user("gone@example.com", "secret-password")

    again = register_user("gone@example.com", "pw")
    assert again.id != user.id


def test_register_duplicate_email(make_user) -> None:
    make_user(email="taken@example.com")
    with pytest.raises(Conflict):
        register_user("taken@example.com", "pw")


def test_update_user_ignores_unknown_fields(make_user) -> None:
    user = make_user()
    updated = update_user(user.id, {"name": "Renamed", "is_active": False, "email": "x@example.com"})
    assert updated.name == "Renamed"
    assert updated.is_active is True
    assert updated.email != "x@example.com"
