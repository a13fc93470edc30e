"""
Subscriber provisioning service.
"""
import logging
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import PersistenceError
from app.models.models import Subscriber
from app.repositories.subscriber_repository import SubscriberRepository
from app.schemas.scope import TenantScope
from app.utils.id_utils import convert_string_to_id

logger = logging.getLogger(__name__)


class SubscriberService:

    def __init__(self, subscriber_repository: SubscriberRepository):
        self.subscriber_repository = subscriber_repository

    def upsert(self, subscriber_id: str, scope: TenantScope) -> Subscriber:
        """
        Register a subscriber identifier in the scope's organization/environment.

        Idempotent: an already registered identifier returns the existing record.
        """
        organization_id = convert_string_to_id(scope.organization_id)
        environment_id = convert_string_to_id(scope.environment_id)

        existing = self.subscriber_repository.find_subscriber(subscriber_id, organization_id, environment_id)
        if existing:
            return existing

        try:
            subscriber = self.subscriber_repository.create_subscriber(
                Subscriber(
                    subscriber_id=subscriber_id,
                    organization_id=organization_id,
                    environment_id=environment_id,
                )
            )
        except IntegrityError as e:
            # Registered concurrently; read the winner
            existing = self.subscriber_repository.find_subscriber(subscriber_id, organization_id, environment_id)
            if existing is None:
                raise PersistenceError(f"Could not register subscriber {subscriber_id}") from e
            return existing

        logger.info(f"Registered subscriber {subscriber_id} in environment {scope.environment_id}")
        return subscriber
