"""
Pydantic schemas for registration request/response validation.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field, model_validator


class RegistrationCreate(BaseModel):
    id: Optional[str] = None
    event_id: str = Field(..., min_length=1)
    application_id: Optional[str] = None
    registration_email: Optional[EmailStr] = None
    attendance: Optional[bool] = None
    is_approved: Optional[bool] = None
    is_team_entry: Optional[bool] = None
    details: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
    ticket_id: Optional[str] = None
    event_title: Optional[str] = None

    @model_validator(mode="after")
    def require_identity(self) -> "RegistrationCreate":
        # Duplicate reconciliation looks rows up by one of these two keys
        if not self.application_id and not self.registration_email:
            raise ValueError("Either application_id or registration_email is required")
        return self


class RegistrationResponse(BaseModel):
    id: str
    event_id: str
    application_id: Optional[str]
    registration_email: Optional[str]
    attendance: Optional[bool]
    is_approved: Optional[bool]
    is_team_entry: Optional[bool]
    details: Optional[dict[str, Any]]
    created_at: datetime
    ticket_id: Optional[str]
    event_title: Optional[str]

    model_config = {"from_attributes": True}
