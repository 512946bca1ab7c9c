"""
Tests for registration, login and profile updates.
"""
import pytest

from mindcare.core.errors import (
    DuplicateEmailError, InvalidCredentialsError, NotFoundError, ValidationError,
)
from mindcare.schemas.user import UserUpdate


def test_create_and_get(accounts):
    user_id = accounts.create("ana", "ana@example.com", "secret123", emergency_phone="+5511999990000")

    user = accounts.get(user_id)
    assert user.username == "ana"
    assert user.email == "ana@example.com"
    assert user.emergency_phone == "+5511999990000"
    assert user.hashed_password != "secret123"


def test_create_duplicate_email(accounts, user_id):
    with pytest.raises(DuplicateEmailError):
        accounts.create("other", "ana@example.com", "whatever")


@pytest.mark.parametrize("username, email, password", [
    ("", "x@example.com", "pw"),
    ("x", None, "pw"),
    ("x", "x@example.com", ""),
])
def test_create_requires_fields(accounts, username, email, password):
    with pytest.raises(ValidationError):
        accounts.create(username, email, password)


def test_verify_credentials(accounts, user_id):
    assert accounts.verify("ana@example.com", "secret123") == (user_id, "ana")

    with pytest.raises(InvalidCredentialsError):
        accounts.verify("ana@example.com", "wrong")
    with pytest.raises(InvalidCredentialsError):
        accounts.verify("nobody@example.com", "secret123")


def test_get_unknown_user(accounts):
    with pytest.raises(NotFoundError):
        accounts.get(9999999)


def test_update_only_supplied_fields(accounts, user_id):
    accounts.update(user_id, UserUpdate(emergency_phone="190"))

    user = accounts.get(user_id)
    assert user.emergency_phone == "190"
    assert user.username == "ana"
    assert accounts.verify("ana@example.com", "secret123") == (user_id, "ana")


def test_empty_password_keeps_old_one(accounts, user_id):
    accounts.update(user_id, UserUpdate(username="ana maria", password=""))

    assert accounts.verify("ana@example.com", "secret123") == (user_id, "ana maria")


def test_new_password_replaces_old_one(accounts, user_id):
    accounts.update(user_id, UserUpdate(password="n3w-secret"))

    assert accounts.verify("ana@example.com", "n3w-secret") == (user_id, "ana")
    with pytest.raises(InvalidCredentialsError):
        accounts.verify("ana@example.com", "secret123")


def test_update_errors(accounts, user_id):
    accounts.create("bruno", "bruno@example.com", "pw")

    with pytest.raises(ValidationError):
        accounts.update(user_id, UserUpdate())
    with pytest.raises(ValidationError):
        accounts.update(user_id, UserUpdate(password=""))
    with pytest.raises(NotFoundError):
        accounts.update(9999999, UserUpdate(username="ghost"))
    with pytest.raises(DuplicateEmailError):
        accounts.update(user_id, UserUpdate(email="bruno@example.com"))
