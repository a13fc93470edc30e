"""
Create-topic orchestration: topic creation followed by subscriber association.
"""
import logging
from typing import List

from app.core.exceptions import NotFoundError, PersistenceError
from app.schemas.scope import TenantScope
from app.schemas.topic import CreateTopicResponse, TopicResponse
from app.services.topic_service import TopicService
from app.services.topic_subscriber_service import TopicSubscriberService

logger = logging.getLogger(__name__)


class CreateTopicService:
    """Creates a topic and attaches its initial subscribers."""

    def __init__(
        self,
        topic_service: TopicService,
        topic_subscriber_service: TopicSubscriberService
    ):
        self.topic_service = topic_service
        self.topic_subscriber_service = topic_subscriber_service

    def create_topic_with_subscribers(
        self,
        key: str,
        name: str,
        scope: TenantScope,
        subscriber_ids: List[str]
    ) -> CreateTopicResponse:
        """
        Create a topic, then associate subscribers with it.

        A ConflictError from topic creation propagates before any association
        is attempted. The two steps are separate writes: if association fails
        the topic is kept and the response reports topic_created=True with the
        failure in subscribers_error. The caller can retry with the
        add-subscribers operation.

        Raises:
            ConflictError: If the key is already used in the tenant scope
            PersistenceError: If the topic itself could not be stored
        """
        topic = self.topic_service.create(key, name, scope)
        # Snapshot before the association step may roll back the session
        created = TopicResponse.from_topic(topic)

        try:
            association = self.topic_subscriber_service.associate(created.id, scope, subscriber_ids)
        except (NotFoundError, PersistenceError) as e:
            logger.warning(
                f"Topic {created.id} ({key}) created but subscriber association failed: {e}"
            )
            return CreateTopicResponse(
                **created.model_dump(),
                subscribers=[],
                topic_created=True,
                subscribers_error=str(e),
            )

        return CreateTopicResponse(
            **created.model_dump(),
            subscribers=association.subscribers,
            topic_created=True,
        )
