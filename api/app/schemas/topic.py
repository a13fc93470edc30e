"""
Topic schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.models.models import Topic
from app.utils.id_utils import convert_id_to_string


class TopicResponse(BaseModel):
    """Topic response schema. Identifiers are exposed as strings."""
    id: str
    key: str
    name: str
    organization_id: str
    environment_id: str
    user_id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_topic(cls, topic: Topic) -> "TopicResponse":
        return cls(
            id=convert_id_to_string(topic.id),
            key=topic.key,
            name=topic.name,
            organization_id=convert_id_to_string(topic.organization_id),
            environment_id=convert_id_to_string(topic.environment_id),
            user_id=convert_id_to_string(topic.user_id),
            created_at=topic.created_at,
        )


class TopicWithSubscribers(TopicResponse):
    """Topic plus the subscriber identifiers associated with it at read time."""
    subscribers: List[str] = []


class CreateTopicResponse(TopicWithSubscribers):
    """
    Result of creating a topic with subscribers.

    Topic creation and subscriber association are separate writes. When the
    association step fails the topic still exists: topic_created stays True,
    subscribers lists what was actually persisted and subscribers_error says why.
    """
    topic_created: bool = True
    subscribers_error: Optional[str] = None


class CreateTopicRequest(BaseModel):
    """Request schema for creating a topic."""
    key: str = Field(min_length=1)
    name: str = Field(min_length=1)
    subscribers: List[str]  # Required, may be empty


class AddSubscribersRequest(BaseModel):
    """Request schema for associating subscribers with an existing topic."""
    subscribers: List[str]  # Required, may be empty


class AddSubscribersResponse(BaseModel):
    """Response schema for subscriber association."""
    topic_id: str
    subscribers: List[str]  # Every subscriber associated after the call
    not_found: List[str] = []  # Identifiers that could not be resolved in scope
