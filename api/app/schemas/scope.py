"""
Tenant scope schema.
"""
from pydantic import BaseModel


class TenantScope(BaseModel):
    """The (organization, environment, user) triple that owns topics."""
    organization_id: str
    environment_id: str
    user_id: str

    class Config:
        frozen = True
