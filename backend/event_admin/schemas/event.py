"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from event_admin.schemas.typeform import TypeformConfig


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    publish_date: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    banner_image: Optional[str] = None
    tags: Optional[list[str]] = None
    event_type: Optional[str] = Field(None, max_length=100)
    is_featured: Optional[bool] = None
    is_gated: Optional[bool] = None
    always_approve: Optional[bool] = None
    more_info: Optional[str] = None
    more_info_text: Optional[str] = None
    external_registration_link: Optional[str] = None
    rules: Optional[str] = None
    slug: str = Field(..., min_length=1, max_length=255)
    typeform_config: Optional[TypeformConfig] = None


class EventUpdate(BaseModel):
    """
    Type coercion for the fields that survived update filtering.
    Every field is optional; only set fields are written.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    publish_date: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    banner_image: Optional[str] = None
    tags: Optional[list[str]] = None
    event_type: Optional[str] = Field(None, max_length=100)
    is_featured: Optional[bool] = None
    is_gated: Optional[bool] = None
    always_approve: Optional[bool] = None
    more_info: Optional[str] = None
    more_info_text: Optional[str] = None
    external_registration_link: Optional[str] = None
    rules: Optional[str] = None
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    typeform_config: Optional[TypeformConfig] = None


class EventResponse(BaseModel):
    id: str
    title: str
    description: Optional[str]
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    publish_date: Optional[datetime]
    venue: Optional[str]
    banner_image: Optional[str]
    tags: Optional[list[str]]
    event_type: Optional[str]
    is_featured: Optional[bool]
    is_gated: bool
    always_approve: bool
    more_info: Optional[str]
    more_info_text: Optional[str]
    external_registration_link: Optional[str]
    rules: Optional[str]
    slug: str
    typeform_config: Optional[list[dict]]
    created_at: datetime

    model_config = {"from_attributes": True}
