from datetime import datetime, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from forumflow.core.errors import Forbidden
from forumflow.db.base import USERS
from forumflow.db.init_db import create_indexes
from forumflow.db.session import MongoGateway
from forumflow.main import create_app
from forumflow.modules.auth.schemas.auth import VerifiedIdentity

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"

IDENTITIES = {
    USER_TOKEN: VerifiedIdentity(uid="user-1", email="reader@forumflow.dev", name="Reader"),
    ADMIN_TOKEN: VerifiedIdentity(uid="admin-1", email="admin@forumflow.dev", name="Admin"),
}


class FakeVerifier:
    """Stands in for Firebase: known tokens map to fixed identities"""

    def __init__(self, identities):
        self.identities = identities
        self.calls = []

    def initialize(self, attempts=None):
        return True

    def verify(self, token):
        self.calls.append(token)
        if token not in self.identities:
            raise Forbidden("Invalid or expired token")
        return self.identities[token]


@pytest.fixture
def gateway():
    gw = MongoGateway(db_name="forumflow_test", client=mongomock.MongoClient())
    create_indexes(gw.db)
    return gw


@pytest.fixture
def db(gateway):
    return gateway.db


@pytest.fixture
def verifier():
    return FakeVerifier(dict(IDENTITIES))


@pytest.fixture
def app(gateway, verifier):
    return create_app(gateway=gateway, verifier=verifier)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def admin_headers(db):
    db[USERS].insert_one({
        "uid": "admin-1",
        "email": "admin@forumflow.dev",
        "name": "Admin",
        "role": "admin",
        "membership": "free",
        "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
    })
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def make_post(client):
    def _make_post(**overrides):
        body = {
            "authorImage": "https://img.forumflow.dev/a.png",
            "authorName": "Ada",
            "authorEmail": "ada@forumflow.dev",
            "postTitle": "Hello",
            "postDescription": "World",
            "tag": "intro",
        }
        body.update(overrides)
        response = client.post("/api/posts", json=body)
        assert response.status_code == 201, response.text
        return response.json()["postId"]

    return _make_post
