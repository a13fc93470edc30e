"""Reusable FastAPI dependencies: tenant scope and per-request service wiring."""
from fastapi import Depends, Header
from sqlmodel import Session

from app.core.database import get_session
from app.repositories.subscriber_repository import SubscriberRepository
from app.repositories.topic_repository import TopicRepository
from app.repositories.topic_subscriber_repository import TopicSubscriberRepository
from app.schemas.scope import TenantScope
from app.services.create_topic_service import CreateTopicService
from app.services.subscriber_service import SubscriberService
from app.services.topic_service import TopicService
from app.services.topic_subscriber_service import TopicSubscriberService
from app.utils.id_utils import convert_string_to_id


async def get_tenant_scope(
    x_organization_id: str = Header(),
    x_environment_id: str = Header(),
    x_user_id: str = Header(),
) -> TenantScope:
    """Read the tenant scope from request headers. Malformed ids raise ValidationError."""
    for value in (x_organization_id, x_environment_id, x_user_id):
        convert_string_to_id(value)
    return TenantScope(
        organization_id=x_organization_id,
        environment_id=x_environment_id,
        user_id=x_user_id,
    )


def get_topic_service(session: Session = Depends(get_session)) -> TopicService:
    return TopicService(TopicRepository(session))


def get_topic_subscriber_service(
    session: Session = Depends(get_session),
    topic_service: TopicService = Depends(get_topic_service),
) -> TopicSubscriberService:
    return TopicSubscriberService(
        topic_service,
        SubscriberRepository(session),
        TopicSubscriberRepository(session),
    )


def get_create_topic_service(
    topic_service: TopicService = Depends(get_topic_service),
    topic_subscriber_service: TopicSubscriberService = Depends(get_topic_subscriber_service),
) -> CreateTopicService:
    return CreateTopicService(topic_service, topic_subscriber_service)


def get_subscriber_service(session: Session = Depends(get_session)) -> SubscriberService:
    return SubscriberService(SubscriberRepository(session))
