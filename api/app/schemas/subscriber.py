"""
Subscriber schemas.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.models.models import Subscriber
from app.utils.id_utils import convert_id_to_string


class SubscriberResponse(BaseModel):
    """Subscriber response schema."""
    id: str
    subscriber_id: str
    organization_id: str
    environment_id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_subscriber(cls, subscriber: Subscriber) -> "SubscriberResponse":
        return cls(
            id=convert_id_to_string(subscriber.id),
            subscriber_id=subscriber.subscriber_id,
            organization_id=convert_id_to_string(subscriber.organization_id),
            environment_id=convert_id_to_string(subscriber.environment_id),
            created_at=subscriber.created_at,
        )
