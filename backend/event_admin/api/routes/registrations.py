"""
Registration endpoint with idempotent duplicate handling.

The body is taken as a plain JSON object; the registration writer validates it.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from event_admin.api.dependencies import get_store
from event_admin.schemas.registration import RegistrationResponse
from event_admin.services.interfaces.store import Store
from event_admin.services.registration_service import send_event_registration

router = APIRouter(prefix="/registrations", tags=["Registrations"])


@router.post("/", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def create_registration(
    registration_data: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
):
    """
    Register a participant for an event.

    Submitting the same identity twice (same application, or same email when
    there is no application) returns the registration created the first time.
    """
    return await send_event_registration(store, registration_data)
