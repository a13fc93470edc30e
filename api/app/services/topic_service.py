"""
Topic registry service: key uniqueness per tenant scope and topic reads.
"""
import logging
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError
from app.models.models import Topic
from app.repositories.topic_repository import TopicRepository
from app.schemas.scope import TenantScope
from app.utils.id_utils import is_valid_id

logger = logging.getLogger(__name__)


class TopicService:
    """Creates and reads topics for a tenant scope."""

    def __init__(self, topic_repository: TopicRepository):
        self.topic_repository = topic_repository

    def create(self, key: str, name: str, scope: TenantScope) -> Topic:
        """
        Create a topic whose key is unused within the tenant scope.

        The existence check and the insert are separate statements. Two
        concurrent callers can both pass the check; the storage unique
        constraint then rejects the second insert, which is reported with the
        same ConflictError as a check hit.

        Args:
            key: Caller-supplied topic key
            name: Display name
            scope: Owning tenant scope

        Returns:
            The persisted Topic

        Raises:
            ConflictError: If a topic with this key already exists in the scope
            PersistenceError: On storage failure
        """
        entity = self._map_to_entity(key, name, scope)

        existing_topic = self.topic_repository.find_topic_by_key(
            entity.key,
            entity.user_id,
            entity.organization_id,
            entity.environment_id
        )
        if existing_topic:
            logger.warning(f"Topic key {key} already taken for user {scope.user_id}")
            raise ConflictError(self._conflict_message(key, scope))

        try:
            topic = self.topic_repository.create_topic(entity)
        except IntegrityError as e:
            logger.warning(f"Topic key {key} was taken concurrently for user {scope.user_id}")
            raise ConflictError(self._conflict_message(key, scope)) from e

        logger.info(f"Created topic {topic.id} with key {key} for user {scope.user_id}")
        return topic

    def get(self, topic_id: str, scope: TenantScope) -> Topic:
        """
        Fetch a topic by its external id within the scope's organization and environment.

        Raises:
            NotFoundError: If the id is malformed or no such topic exists in scope
        """
        if not is_valid_id(topic_id):
            raise NotFoundError(f"Topic {topic_id} not found")

        topic = self.topic_repository.find_topic_by_id(
            TopicRepository.convert_string_to_id(topic_id),
            TopicRepository.convert_string_to_id(scope.organization_id),
            TopicRepository.convert_string_to_id(scope.environment_id)
        )
        if not topic:
            raise NotFoundError(f"Topic {topic_id} not found")
        return topic

    def get_by_key(self, key: str, scope: TenantScope) -> Topic:
        organization_id, environment_id, user_id = self._scope_ids(scope)
        topic = self.topic_repository.find_topic_by_key(key, user_id, organization_id, environment_id)
        if not topic:
            raise NotFoundError(f"Topic with key {key} not found for user {scope.user_id}")
        return topic

    @staticmethod
    def _conflict_message(key: str, scope: TenantScope) -> str:
        return f"There is already a topic with the key {key} for user {scope.user_id}"

    @staticmethod
    def _scope_ids(scope: TenantScope):
        return (
            TopicRepository.convert_string_to_id(scope.organization_id),
            TopicRepository.convert_string_to_id(scope.environment_id),
            TopicRepository.convert_string_to_id(scope.user_id),
        )

    @classmethod
    def _map_to_entity(cls, key: str, name: str, scope: TenantScope) -> Topic:
        organization_id, environment_id, user_id = cls._scope_ids(scope)
        return Topic(
            key=key,
            name=name,
            organization_id=organization_id,
            environment_id=environment_id,
            user_id=user_id,
        )
