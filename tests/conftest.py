"""
Shared fixtures for the OrderDesk tests.

The content store is replaced by FakeStore, an in-memory stand-in with the
same fetch / patch().set().commit() / delete surface as ContentStoreClient.
Run with: pytest tests/ -v
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from orderdesk import OrderDesk
from orderdesk.core import StoreError

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"

ORDER_DOCUMENTS = [
    {
        "_id": "ord-a",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "phone": "555-0100",
        "email": "ada@example.com",
        "address": "1 Analytical Way",
        "city": "London",
        "zipCode": "N1",
        "total": 120,
        "discount": 0,
        "orderDate": "2025-01-15T10:30:00.000Z",
        "status": "pending",
        "cartItems": [
            {"productName": "Walnut Chair", "image": "https://cdn.example.com/chair.png"},
            {"productName": "Oak Table", "image": "https://cdn.example.com/table.png"},
        ],
    },
    {
        "_id": "ord-b",
        "firstName": "Grace",
        "lastName": "Hopper",
        "total": 80,
        "discount": 10,
        "orderDate": "2025-02-01T08:00:00.000Z",
        "status": "dispatch",
        "cartItems": [{"productName": "Desk Lamp", "image": None}],
    },
    {
        "_id": "ord-c",
        "firstName": "Alan",
        "lastName": "Turing",
        "total": 45.5,
        "orderDate": "2025-02-03T12:00:00.000Z",
        "status": "success",
        "cartItems": [],
    },
    {
        "_id": "ord-d",
        "firstName": "Edsger",
        "lastName": "Dijkstra",
        "total": 300,
        "orderDate": "2025-03-10T09:15:00.000Z",
        "status": None,
        "cartItems": None,
    },
    {
        "_id": "ord-e",
        "firstName": "Barbara",
        "lastName": "Liskov",
        "total": 60,
        "orderDate": "2025-03-11T09:15:00.000Z",
        "status": "pending",
        "cartItems": [None],
    },
]


class FakePatch:
    def __init__(self, store, doc_id):
        self.store = store
        self.doc_id = doc_id
        self.fields = {}

    def set(self, fields):
        self.fields.update(fields)
        return self

    def commit(self):
        self.store.calls.append(("patch", self.doc_id, dict(self.fields)))
        if "patch" in self.store.fail:
            raise StoreError("Mutation failed: insufficient permissions", 403)
        for doc in self.store.documents:
            if doc["_id"] == self.doc_id:
                doc.update(self.fields)
        return {"transactionId": "tx-patch", "results": [{"id": self.doc_id, "operation": "update"}]}


class FakeStore:
    """In-memory content store; add 'fetch', 'patch' or 'delete' to fail to break that call"""

    is_configured = True

    def __init__(self, documents):
        self.documents = [dict(doc) for doc in documents]
        self.fail = set()
        self.calls = []

    def fetch(self, query, params=None):
        self.calls.append(("fetch", query))
        if "fetch" in self.fail:
            raise StoreError("Content store unreachable: connection refused")
        return [dict(doc) for doc in self.documents]

    def patch(self, doc_id):
        return FakePatch(self, doc_id)

    def delete(self, doc_id):
        self.calls.append(("delete", doc_id))
        if "delete" in self.fail:
            raise StoreError("Document not found", 404)
        self.documents = [doc for doc in self.documents if doc["_id"] != doc_id]
        return {"transactionId": "tx-delete", "results": [{"id": doc_id, "operation": "delete"}]}

    def count(self, operation):
        return sum(1 for call in self.calls if call[0] == operation)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for the log database, cleaned up after."""
    d = tempfile.mkdtemp(prefix="orderdesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def store():
    return FakeStore(ORDER_DOCUMENTS)


@pytest.fixture
def app(tmp_db_dir, store):
    """Flask app with OrderDesk mounted on a fake store."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["ADMIN_EMAIL"] = ADMIN_EMAIL
    app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
    app.config["CORS_ORIGINS"] = ["https://shop.example.com"]
    OrderDesk(app, store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    response = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def app_ctx(app):
    with app.test_request_context():
        yield
