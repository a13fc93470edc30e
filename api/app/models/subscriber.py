"""
Subscriber model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import List, TYPE_CHECKING
from datetime import datetime, timezone
from sqlalchemy import DateTime, UniqueConstraint
import uuid

if TYPE_CHECKING:
    from app.models.topic_subscriber import TopicSubscriber


class Subscriber(SQLModel, table=True):
    """Subscriber table - caller-facing subscriber identifiers per organization/environment."""
    __tablename__ = "subscriber"
    __table_args__ = (
        UniqueConstraint(
            "subscriber_id", "organization_id", "environment_id",
            name="uq_subscriber_scope"
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    subscriber_id: str = Field(index=True)  # Identifier chosen by the caller
    organization_id: uuid.UUID
    environment_id: uuid.UUID
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )

    # Relationships
    topic_subscribers: List["TopicSubscriber"] = Relationship(back_populates="subscriber")
