"""
TopicSubscriber model - junction table for topic subscriptions.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import DateTime
import uuid

if TYPE_CHECKING:
    from app.models.subscriber import Subscriber
    from app.models.topic import Topic


class TopicSubscriber(SQLModel, table=True):
    """TopicSubscriber junction table - one row per (topic, subscriber) pair."""
    __tablename__ = "topic_subscriber"

    topic_id: uuid.UUID = Field(foreign_key="topic.id", primary_key=True)
    subscriber_id: uuid.UUID = Field(foreign_key="subscriber.id", primary_key=True)

    # Denormalized for reads without joins
    external_subscriber_id: str
    topic_key: str
    organization_id: uuid.UUID
    environment_id: uuid.UUID
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )

    # Relationships
    topic: "Topic" = Relationship(back_populates="topic_subscribers")
    subscriber: "Subscriber" = Relationship(back_populates="topic_subscribers")
