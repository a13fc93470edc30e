"""
Topic persistence.
"""
# pyright: reportAttributeAccessIssue=false
from sqlmodel import select
from typing import Optional
import uuid

from app.models.models import Topic
from app.repositories.base import BaseRepository
from app.utils.id_utils import convert_string_to_id, convert_id_to_string


class TopicRepository(BaseRepository):
    """Key-based lookup and insert for topics."""

    convert_string_to_id = staticmethod(convert_string_to_id)
    convert_id_to_string = staticmethod(convert_id_to_string)

    def find_topic_by_key(
        self,
        key: str,
        user_id: uuid.UUID,
        organization_id: uuid.UUID,
        environment_id: uuid.UUID
    ) -> Optional[Topic]:
        with self.storage_errors(f"look up topic {key}"):
            return self.session.exec(
                select(Topic).where(
                    Topic.key == key,
                    Topic.user_id == user_id,
                    Topic.organization_id == organization_id,
                    Topic.environment_id == environment_id
                )
            ).first()

    def find_topic_by_id(
        self,
        topic_id: uuid.UUID,
        organization_id: uuid.UUID,
        environment_id: uuid.UUID
    ) -> Optional[Topic]:
        with self.storage_errors(f"look up topic {topic_id}"):
            return self.session.exec(
                select(Topic).where(
                    Topic.id == topic_id,
                    Topic.organization_id == organization_id,
                    Topic.environment_id == environment_id
                )
            ).first()

    def create_topic(self, entity: Topic) -> Topic:
        """
        Insert and commit a topic.

        Raises:
            IntegrityError: If the (key, scope) unique constraint rejects the row
            PersistenceError: On any other storage failure
        """
        with self.storage_errors(f"create topic {entity.key}"):
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
        return entity
