"""Common Pydantic schemas used across the application"""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads; fields are exposed in camelCase"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class HealthCheck(BaseModel):
    """Schema for health check response"""
    status: str = Field(..., pattern=r'^(healthy|unhealthy)$')
    services: Dict[str, bool] = Field(
        default_factory=dict,
        description="Status of individual service checks"
    )
    version: Optional[str] = Field(None, description="Application version")
