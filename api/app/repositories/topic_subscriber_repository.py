"""
Topic subscriber (association) persistence.
"""
# pyright: reportAttributeAccessIssue=false
from sqlmodel import select
from sqlalchemy.exc import IntegrityError
from typing import List
import logging
import uuid

from app.core.exceptions import PersistenceError
from app.models.models import TopicSubscriber
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TopicSubscriberRepository(BaseRepository):

    def find_topic_subscribers(self, topic_id: uuid.UUID) -> List[TopicSubscriber]:
        """Associations of a topic, oldest first."""
        with self.storage_errors(f"list subscribers of topic {topic_id}"):
            return list(self.session.exec(
                select(TopicSubscriber)
                .where(TopicSubscriber.topic_id == topic_id)
                .order_by(TopicSubscriber.created_at, TopicSubscriber.external_subscriber_id)  # type: ignore
            ).all())

    def add_topic_subscriber(self, entity: TopicSubscriber) -> bool:
        """
        Insert one association inside a savepoint. Nothing is committed.

        Returns:
            True if the row was inserted, False if the pair already existed
            (another request inserted it after our existence check)

        Raises:
            PersistenceError: If the insert violates any other constraint
        """
        topic_id, subscriber_id = entity.topic_id, entity.subscriber_id
        external_subscriber_id = entity.external_subscriber_id

        with self.storage_errors(f"associate {external_subscriber_id}"):
            try:
                # Only the savepoint is rolled back; earlier inserts in the batch survive
                with self.session.begin_nested():
                    self.session.add(entity)
            except IntegrityError as e:
                if self.session.get(TopicSubscriber, (topic_id, subscriber_id)) is None:
                    # Not a duplicate pair (missing topic/subscriber row, null column...)
                    self.session.rollback()
                    logger.error(f"Could not associate {external_subscriber_id} with topic {topic_id}: {e}")
                    raise PersistenceError(
                        f"Could not associate subscriber {external_subscriber_id} with topic {topic_id}"
                    ) from e
                logger.info(
                    f"Subscriber {external_subscriber_id} was already associated "
                    f"with topic {topic_id}"
                )
                return False
        return True
