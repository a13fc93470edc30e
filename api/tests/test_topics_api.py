import inspect
import uuid

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_create_topic_service, get_topic_subscriber_service
from app.api.v1.endpoints import subscribers, topics
from app.core.config import settings
from app.core.exceptions import PersistenceError

PREFIX = "/api/v1"


@pytest.fixture
def registered(client, headers):
    """Register subscriber identifiers through the API."""
    def _register(*subscriber_ids: str):
        for sid in subscriber_ids:
            response = client.put(f"{PREFIX}/subscribers/{sid}", headers=headers)
            assert response.status_code == 200
    return _register


def create_topic(client, headers, key="promo", name="Promotions", subscribers=None):
    return client.post(
        f"{PREFIX}/topics",
        json={"key": key, "name": name, "subscribers": subscribers or []},
        headers=headers,
    )


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestCreateTopicEndpoint:

    def test_create(self, client, headers, registered, scope):
        registered("s1", "s2")

        response = create_topic(client, headers, subscribers=["s1", "s2", "s2"])

        assert response.status_code == 201
        body = response.json()
        assert body["key"] == "promo"
        assert body["organization_id"] == scope.organization_id
        assert body["subscribers"] == ["s1", "s2"]
        assert body["topic_created"] is True
        assert body["subscribers_error"] is None
        uuid.UUID(body["id"])

    def test_duplicate_key_is_409(self, client, headers, scope):
        assert create_topic(client, headers).status_code == 201

        response = create_topic(client, headers, name="Other name")

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "ConflictError"
        assert body["detail"] == f"There is already a topic with the key promo for user {scope.user_id}"

    def test_same_key_for_other_user(self, client, headers):
        assert create_topic(client, headers).status_code == 201

        other_user = dict(headers, **{"X-User-Id": str(uuid.uuid4())})
        assert create_topic(client, other_user).status_code == 201

    def test_missing_subscribers_is_422(self, client, headers):
        response = client.post(f"{PREFIX}/topics", json={"key": "promo", "name": "Promotions"}, headers=headers)
        assert response.status_code == 422

    def test_missing_scope_header_is_422(self, client, headers):
        partial = {k: v for k, v in headers.items() if k != "X-User-Id"}
        assert create_topic(client, partial).status_code == 422

    def test_malformed_scope_header_is_400(self, client, headers):
        response = create_topic(client, dict(headers, **{"X-Organization-Id": "acme"}))
        assert response.status_code == 400
        assert response.json()["type"] == "ValidationError"


class TestReadTopicEndpoints:

    def test_get_by_id(self, client, headers, registered):
        registered("s1")
        topic_id = create_topic(client, headers, subscribers=["s1"]).json()["id"]

        response = client.get(f"{PREFIX}/topics/{topic_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["subscribers"] == ["s1"]
        assert "topic_created" not in response.json()

    def test_get_by_key(self, client, headers):
        topic_id = create_topic(client, headers).json()["id"]

        response = client.get(f"{PREFIX}/topics/key/promo", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == topic_id

    def test_unknown_topic_is_404(self, client, headers):
        response = client.get(f"{PREFIX}/topics/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 404
        assert response.json()["type"] == "NotFoundError"

    def test_topic_hidden_from_other_organization(self, client, headers):
        topic_id = create_topic(client, headers).json()["id"]
        outsider = dict(headers, **{"X-Organization-Id": str(uuid.uuid4())})

        assert client.get(f"{PREFIX}/topics/{topic_id}", headers=outsider).status_code == 404


class TestAddSubscribersEndpoint:

    def test_add_is_idempotent(self, client, headers, registered):
        registered("s1", "s2")
        topic_id = create_topic(client, headers, subscribers=["s1"]).json()["id"]

        for _ in range(2):
            response = client.post(
                f"{PREFIX}/topics/{topic_id}/subscribers",
                json={"subscribers": ["s1", "s2", "ghost"]},
                headers=headers,
            )
            assert response.status_code == 200
            body = response.json()
            assert body["topic_id"] == topic_id
            assert body["subscribers"] == ["s1", "s2"]
            assert body["not_found"] == ["ghost"]

    def test_unknown_topic_is_404(self, client, headers):
        response = client.post(
            f"{PREFIX}/topics/{uuid.uuid4()}/subscribers",
            json={"subscribers": []},
            headers=headers,
        )
        assert response.status_code == 404

    def test_missing_subscribers_is_422(self, client, headers):
        topic_id = create_topic(client, headers).json()["id"]
        response = client.post(f"{PREFIX}/topics/{topic_id}/subscribers", json={}, headers=headers)
        assert response.status_code == 422


class TestSubscribersEndpoint:

    def test_register_is_idempotent(self, client, headers, scope):
        first = client.put(f"{PREFIX}/subscribers/s1", headers=headers).json()
        second = client.put(f"{PREFIX}/subscribers/s1", headers=headers).json()

        assert first["id"] == second["id"]
        assert first["subscriber_id"] == "s1"
        assert first["environment_id"] == scope.environment_id


class UnavailableStorage:
    """Service double whose every call fails the way a lost database connection does."""

    def create_topic_with_subscribers(self, *args, **kwargs):
        raise PersistenceError("Storage failure while trying to create topic promo")

    def associate(self, *args, **kwargs):
        raise RuntimeError("unexpected failure")


class TestErrorResponses:

    def test_storage_failure_is_503(self, client, headers):
        client.app.dependency_overrides[get_create_topic_service] = UnavailableStorage

        response = create_topic(client, headers)

        assert response.status_code == 503
        assert response.json()["type"] == "PersistenceError"

    def test_unhandled_error_is_generic_500(self, client, headers, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")
        client.app.dependency_overrides[get_topic_subscriber_service] = UnavailableStorage
        failing_client = TestClient(client.app, raise_server_exceptions=False)

        response = failing_client.post(
            f"{PREFIX}/topics/{uuid.uuid4()}/subscribers",
            json={"subscribers": ["s1"]},
            headers=headers,
        )

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "InternalServerError"
        assert "unexpected failure" not in body["detail"]


@pytest.mark.parametrize("endpoint", [
    topics.create_topic,
    topics.get_topic_by_key,
    topics.get_topic,
    topics.add_subscribers,
    subscribers.register_subscriber,
])
def test_endpoints_run_in_threadpool(endpoint):
    # Database calls are blocking; coroutine endpoints would run them on the event loop
    assert not inspect.iscoroutinefunction(endpoint)
