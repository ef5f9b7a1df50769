# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from itertools import count
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

from errandhub.extensions import db
from errandhub.main import create_app
from errandhub.models.order import OrderRole
from errandhub.models.user import User
from errandhub.routes.chat_routes import BROADCASTER_KEY
from errandhub.services.order_service import create_order
from errandhub.utils.auth_utils import hash_password

_EMAIL_COUNTER = count(1)
DEFAULT_PASSWORD = "secret-password"


class RecordingBroadcaster:
    """Collects broadcasts instead of pushing them over Socket.IO."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def emit(self, channel: str, event: str, payload: dict[str, Any]) -> None:
        self.events.append((channel, event, payload))


@pytest.fixture()
def app() -> Iterator[Flask]:
    flask_app = create_app("testing")
    with flask_app.app_context():
        db.create_all()
        try:
            yield flask_app
        finally:
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def broadcaster(app: Flask) -> RecordingBroadcaster:
    recorder = RecordingBroadcaster()
    app.extensions[BROADCASTER_KEY] = recorder
    return recorder


@pytest.fixture()
def make_user(app: Flask) -> Callable[..., User]:
    """Factory persisting active users; pass ``id`` to pin the primary key."""

    def _make_user(**overrides: Any) -> User:
        n = next(_EMAIL_COUNTER)
        values: dict[str, Any] = {
            "email": f"user{n}@example.com",
            "password_hash": hash_password(DEFAULT_PASSWORD),
            "name": f"User {n}",
            "gender": "O",
        }
        values.update(overrides)
        user = User(**values)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_order(app: Flask) -> Callable[..., Any]:
    def _make_order(owner: User, role: OrderRole | str = OrderRole.SHOPPER, **data: Any):
        role = OrderRole(role)
        payload: dict[str, Any] = {"title": "Groceries", "priority": "FREE"}
        if role is OrderRole.RUNNER:
            payload = {"distance": "1KM", "introduce": "fast and friendly"}
        payload.update(data)
        return create_order(role, owner.id, payload)

    return _make_order


@pytest.fixture()
def auth_headers(app: Flask) -> Callable[[User], dict[str, str]]:
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
