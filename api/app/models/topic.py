"""
Topic model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import DateTime, UniqueConstraint
import uuid

if TYPE_CHECKING:
    from app.models.topic_subscriber import TopicSubscriber


class Topic(SQLModel, table=True):
    """Topic table - a keyed group of subscribers owned by a tenant scope."""
    __tablename__ = "topic"
    __table_args__ = (
        # Keys are unique per (organization, environment, user), not globally
        UniqueConstraint(
            "key", "organization_id", "environment_id", "user_id",
            name="uq_topic_key_scope"
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    key: str = Field(index=True)
    name: str
    organization_id: uuid.UUID = Field(index=True)
    environment_id: uuid.UUID = Field(index=True)
    user_id: uuid.UUID
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )

    # Relationships
    topic_subscribers: List["TopicSubscriber"] = Relationship(back_populates="topic")
