"""
Subscribers endpoint.
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_subscriber_service, get_tenant_scope
from app.schemas.scope import TenantScope
from app.schemas.subscriber import SubscriberResponse
from app.services.subscriber_service import SubscriberService

router = APIRouter(prefix="/subscribers", tags=["subscribers"])


@router.put("/{subscriber_id}", response_model=SubscriberResponse)
def register_subscriber(
    subscriber_id: str,
    scope: TenantScope = Depends(get_tenant_scope),
    subscriber_service: SubscriberService = Depends(get_subscriber_service)
):
    """Register a subscriber identifier in the caller's environment (idempotent)."""
    subscriber = subscriber_service.upsert(subscriber_id, scope)
    return SubscriberResponse.from_subscriber(subscriber)
