"""
Pytest configuration and fixtures.
Adds api/ to sys.path so `import app` works, and points the app at an in-memory database.
"""
import os
import sys
import uuid
from pathlib import Path

import pytest

api_root = Path(__file__).resolve().parent.parent
if str(api_root) not in sys.path:
    sys.path.insert(0, str(api_root))

# Must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from app.core.database import create_db_engine, get_session  # noqa: E402
from app.models import models  # noqa: E402,F401
from app.models.models import Subscriber  # noqa: E402
from app.repositories.subscriber_repository import SubscriberRepository  # noqa: E402
from app.repositories.topic_repository import TopicRepository  # noqa: E402
from app.repositories.topic_subscriber_repository import TopicSubscriberRepository  # noqa: E402
from app.schemas.scope import TenantScope  # noqa: E402
from app.services.create_topic_service import CreateTopicService  # noqa: E402
from app.services.subscriber_service import SubscriberService  # noqa: E402
from app.services.topic_service import TopicService  # noqa: E402
from app.services.topic_subscriber_service import TopicSubscriberService  # noqa: E402


def new_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def scope() -> TenantScope:
    return TenantScope(organization_id=new_id(), environment_id=new_id(), user_id=new_id())


@pytest.fixture
def topic_repository(session) -> TopicRepository:
    return TopicRepository(session)


@pytest.fixture
def topic_subscriber_repository(session) -> TopicSubscriberRepository:
    return TopicSubscriberRepository(session)


@pytest.fixture
def topic_service(topic_repository) -> TopicService:
    return TopicService(topic_repository)


@pytest.fixture
def subscriber_service(session) -> SubscriberService:
    return SubscriberService(SubscriberRepository(session))


@pytest.fixture
def topic_subscriber_service(session, topic_service, topic_subscriber_repository) -> TopicSubscriberService:
    return TopicSubscriberService(topic_service, SubscriberRepository(session), topic_subscriber_repository)


@pytest.fixture
def create_topic_service(topic_service, topic_subscriber_service) -> CreateTopicService:
    return CreateTopicService(topic_service, topic_subscriber_service)


@pytest.fixture
def register_subscribers(subscriber_service, scope):
    """Register subscriber identifiers in the default scope."""
    def _register(*subscriber_ids: str, in_scope: TenantScope = None) -> list[Subscriber]:
        return [subscriber_service.upsert(sid, in_scope or scope) for sid in subscriber_ids]
    return _register


@pytest.fixture
def client(engine):
    from app.main import app

    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def headers(scope) -> dict:
    return {
        "X-Organization-Id": scope.organization_id,
        "X-Environment-Id": scope.environment_id,
        "X-User-Id": scope.user_id,
    }
