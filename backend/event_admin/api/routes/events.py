"""
Event endpoints: create, partial update, and typeform config lookup.

Request bodies are taken as plain JSON objects so the event writer's
validation gate and update whitelist see exactly what the client sent.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from event_admin.api.dependencies import get_store
from event_admin.core.config import get_settings
from event_admin.schemas.event import EventResponse
from event_admin.schemas.typeform import TypeformFieldView
from event_admin.services.event_service import create_event, get_event, get_typeform_config, update_event
from event_admin.services.interfaces.store import Store

router = APIRouter(prefix="/events", tags=["Events"])
settings = get_settings()


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
):
    """Create a new event. `is_gated` and `always_approve` default to false."""
    return await create_event(store, event_data)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: str, store: Store = Depends(get_store)):
    event = await get_event(store, event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return event


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: str,
    changes: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
):
    """
    Partially update an event.

    Text fields are only written when non-empty; boolean and nullable fields
    are written whenever present. Unknown keys are ignored.
    """
    return await update_event(store, event_id, changes)


@router.get("/{event_id}/typeform-config", response_model=list[TypeformFieldView])
async def get_typeform_config_endpoint(event_id: str, store: Store = Depends(get_store)):
    """Field descriptors with defaults applied, as the admin panel renders them."""
    config = await get_typeform_config(store, event_id)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return [TypeformFieldView.from_config(field, settings.DEFAULT_BUCKET_NAME) for field in config]
