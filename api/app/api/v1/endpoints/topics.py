"""
Topics endpoint.
"""
from fastapi import APIRouter, Depends, status

from app.api.dependencies import (
    get_create_topic_service,
    get_tenant_scope,
    get_topic_service,
    get_topic_subscriber_service,
)
from app.schemas.scope import TenantScope
from app.schemas.topic import (
    AddSubscribersRequest,
    AddSubscribersResponse,
    CreateTopicRequest,
    CreateTopicResponse,
    TopicResponse,
    TopicWithSubscribers,
)
from app.services.create_topic_service import CreateTopicService
from app.services.topic_service import TopicService
from app.services.topic_subscriber_service import TopicSubscriberService

router = APIRouter(prefix="/topics", tags=["topics"])


@router.post("", response_model=CreateTopicResponse, status_code=status.HTTP_201_CREATED)
def create_topic(
    request: CreateTopicRequest,
    scope: TenantScope = Depends(get_tenant_scope),
    create_topic_service: CreateTopicService = Depends(get_create_topic_service)
):
    """Create a topic with its initial subscribers. 409 if the key is already used by this user."""
    return create_topic_service.create_topic_with_subscribers(
        request.key,
        request.name,
        scope,
        request.subscribers
    )


@router.get("/key/{key}", response_model=TopicWithSubscribers)
def get_topic_by_key(
    key: str,
    scope: TenantScope = Depends(get_tenant_scope),
    topic_service: TopicService = Depends(get_topic_service),
    topic_subscriber_service: TopicSubscriberService = Depends(get_topic_subscriber_service)
):
    """Get a topic of the calling user by key, with its subscribers."""
    topic = TopicResponse.from_topic(topic_service.get_by_key(key, scope))
    subscribers = topic_subscriber_service.list_subscribers(topic.id, scope)
    return TopicWithSubscribers(**topic.model_dump(), subscribers=subscribers)


@router.get("/{topic_id}", response_model=TopicWithSubscribers)
def get_topic(
    topic_id: str,
    scope: TenantScope = Depends(get_tenant_scope),
    topic_service: TopicService = Depends(get_topic_service),
    topic_subscriber_service: TopicSubscriberService = Depends(get_topic_subscriber_service)
):
    """Get a topic by ID, with its subscribers."""
    topic = TopicResponse.from_topic(topic_service.get(topic_id, scope))
    subscribers = topic_subscriber_service.list_subscribers(topic_id, scope)
    return TopicWithSubscribers(**topic.model_dump(), subscribers=subscribers)


@router.post("/{topic_id}/subscribers", response_model=AddSubscribersResponse)
def add_subscribers(
    topic_id: str,
    request: AddSubscribersRequest,
    scope: TenantScope = Depends(get_tenant_scope),
    topic_subscriber_service: TopicSubscriberService = Depends(get_topic_subscriber_service)
):
    """Associate subscribers with an existing topic. Already associated subscribers are left as is."""
    return topic_subscriber_service.associate(topic_id, scope, request.subscribers)
