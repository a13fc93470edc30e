"""
Subscriber persistence.
"""
# pyright: reportAttributeAccessIssue=false
from sqlmodel import select
from typing import List, Optional
import uuid

from app.models.models import Subscriber
from app.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository):

    def find_subscribers(
        self,
        subscriber_ids: List[str],
        organization_id: uuid.UUID,
        environment_id: uuid.UUID
    ) -> List[Subscriber]:
        """Resolve caller-facing subscriber identifiers within an organization/environment."""
        if not subscriber_ids:
            return []
        with self.storage_errors("resolve subscribers"):
            return list(self.session.exec(
                select(Subscriber).where(
                    Subscriber.subscriber_id.in_(subscriber_ids),  # type: ignore
                    Subscriber.organization_id == organization_id,
                    Subscriber.environment_id == environment_id
                )
            ).all())

    def find_subscriber(
        self,
        subscriber_id: str,
        organization_id: uuid.UUID,
        environment_id: uuid.UUID
    ) -> Optional[Subscriber]:
        found = self.find_subscribers([subscriber_id], organization_id, environment_id)
        return found[0] if found else None

    def create_subscriber(self, entity: Subscriber) -> Subscriber:
        with self.storage_errors(f"create subscriber {entity.subscriber_id}"):
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
        return entity
