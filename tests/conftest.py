# tests/conftest.py

from __future__ import annotations

import pytest

from taskmanager import create_app
from taskmanager.models import db, User

from .factories import make_user


@pytest.fixture()
def app(tmp_path):
    """
    Application wired with TestingConfig (in-memory sqlite).

    The app context stays pushed for the whole test so fixtures and
    assertions can use ``db.session`` directly.
    """
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin(app) -> User:
    return make_user("Ada Admin", "ada@example.com", role="admin")


@pytest.fixture()
def member(app) -> User:
    return make_user("Mel Member", "mel@example.com")


@pytest.fixture()
def other_member(app) -> User:
    return make_user("Otto Other", "otto@example.com")
