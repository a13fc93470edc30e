"""
Subscriber association service for business logic related to topic subscriptions.
"""
import logging
from typing import List

from app.models.models import Topic, TopicSubscriber
from app.repositories.subscriber_repository import SubscriberRepository
from app.repositories.topic_subscriber_repository import TopicSubscriberRepository
from app.schemas.scope import TenantScope
from app.schemas.topic import AddSubscribersResponse
from app.services.topic_service import TopicService

logger = logging.getLogger(__name__)


def deduplicate(values: List[str]) -> List[str]:
    """Drop repeated values, keeping first-occurrence order."""
    return list(dict.fromkeys(values))


class TopicSubscriberService:
    """Idempotently associates subscribers with topics."""

    def __init__(
        self,
        topic_service: TopicService,
        subscriber_repository: SubscriberRepository,
        topic_subscriber_repository: TopicSubscriberRepository
    ):
        self.topic_service = topic_service
        self.subscriber_repository = subscriber_repository
        self.topic_subscriber_repository = topic_subscriber_repository

    def associate(
        self,
        topic_id: str,
        scope: TenantScope,
        subscriber_ids: List[str]
    ) -> AddSubscribersResponse:
        """
        Associate subscribers with a topic, creating only the missing associations.

        Re-running with the same input leaves the same association set and
        raises nothing. Identifiers that do not resolve to a subscriber in the
        topic's organization/environment are skipped and reported in not_found.

        Args:
            topic_id: External topic id
            scope: Tenant scope of the caller
            subscriber_ids: Subscriber identifiers, may be empty or contain duplicates

        Returns:
            AddSubscribersResponse listing every subscriber associated after the
            call: pre-existing ones first (oldest first), then new ones in input order

        Raises:
            NotFoundError: If the topic does not exist in the tenant scope
            PersistenceError: On storage failure (no new association is kept)
        """
        topic = self.topic_service.get(topic_id, scope)
        requested = deduplicate(subscriber_ids)

        existing = self.topic_subscriber_repository.find_topic_subscribers(topic.id)
        associated = [ts.external_subscriber_id for ts in existing]
        associated_ids = {ts.subscriber_id for ts in existing}

        resolved = {
            subscriber.subscriber_id: subscriber
            for subscriber in self.subscriber_repository.find_subscribers(
                requested, topic.organization_id, topic.environment_id
            )
        }
        not_found = [sid for sid in requested if sid not in resolved]
        if not_found:
            logger.warning(
                f"Skipping {len(not_found)} subscriber(s) not found in scope of topic {topic_id}: {not_found}"
            )

        added = 0
        for external_id in requested:
            subscriber = resolved.get(external_id)
            if subscriber is None or subscriber.id in associated_ids:
                continue
            if self.topic_subscriber_repository.add_topic_subscriber(
                self._map_to_entity(topic, subscriber.id, external_id)
            ):
                added += 1
            # Inserted by us or by a concurrent request, the pair exists either way
            associated_ids.add(subscriber.id)
            associated.append(external_id)

        self.topic_subscriber_repository.commit()

        logger.info(
            f"Topic {topic_id}: {added} subscriber(s) added, {len(associated)} associated in total"
        )
        return AddSubscribersResponse(
            topic_id=topic_id,
            subscribers=associated,
            not_found=not_found,
        )

    def list_subscribers(self, topic_id: str, scope: TenantScope) -> List[str]:
        """Subscriber identifiers associated with a topic, oldest first."""
        topic = self.topic_service.get(topic_id, scope)
        return [
            ts.external_subscriber_id
            for ts in self.topic_subscriber_repository.find_topic_subscribers(topic.id)
        ]

    @staticmethod
    def _map_to_entity(topic: Topic, subscriber_id, external_subscriber_id: str) -> TopicSubscriber:
        return TopicSubscriber(
            topic_id=topic.id,
            subscriber_id=subscriber_id,
            external_subscriber_id=external_subscriber_id,
            topic_key=topic.key,
            organization_id=topic.organization_id,
            environment_id=topic.environment_id,
        )
