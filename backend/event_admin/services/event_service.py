"""
Event writer: create and partially update event rows.

Partial updates use a field whitelist with two admission rules:

  - "truthy" fields are written only when the provided value is set: None,
    an empty string, 0 and False count as "not provided", while empty lists
    and objects are written
  - "defined" fields (booleans and nullable text) are written whenever the key
    is present, including False and None

The rule is per field. A truthy field can never be
cleared to "" through update_event.
"""

from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from event_admin.core.errors import ValidationError, WriteError
from event_admin.core.logging import get_logger
from event_admin.core.metrics import record_event_write
from event_admin.schemas.event import EventCreate, EventUpdate
from event_admin.schemas.typeform import TypeformConfig
from event_admin.services.interfaces.store import Store

logger = get_logger(__name__)

EVENTS_TABLE = "events"

TRUTHY_FIELDS = (
    "title",
    "description",
    "start_date",
    "end_date",
    "publish_date",
    "venue",
    "banner_image",
    "tags",
    "event_type",
    "more_info",
    "rules",
    "slug",
    "typeform_config",
)

DEFINED_FIELDS = (
    "is_featured",
    "is_gated",
    "always_approve",
    "more_info_text",
    "external_registration_link",
)


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def _is_set(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (str, int, float)):
        return value != "" and value != 0
    return True


def build_update_payload(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Select the whitelisted fields that count as provided. Unknown keys are dropped."""
    payload = {}
    for field in TRUTHY_FIELDS:
        if _is_set(changes.get(field)):
            payload[field] = changes[field]
    for field in DEFINED_FIELDS:
        if field in changes:
            payload[field] = changes[field]
    return payload


async def create_event(store: Store, event_data: Mapping[str, Any] | EventCreate) -> dict:
    """Validate and insert a new event. Gating and auto-approval default to off."""
    try:
        event = EventCreate.model_validate(event_data)
    except PydanticValidationError as e:
        record_event_write("create", success=False)
        raise ValidationError("Invalid event data", cause=e) from e

    result = await store.insert(
        EVENTS_TABLE,
        {
            "title": event.title,
            "description": event.description,
            "start_date": event.start_date,
            "end_date": event.end_date,
            "publish_date": event.publish_date,
            "venue": event.venue,
            "banner_image": event.banner_image,
            "tags": event.tags,
            "event_type": event.event_type,
            "is_featured": event.is_featured,
            "is_gated": event.is_gated if event.is_gated is not None else False,
            "always_approve": event.always_approve if event.always_approve is not None else False,
            "more_info": event.more_info,
            "more_info_text": event.more_info_text,
            "external_registration_link": event.external_registration_link,
            "rules": event.rules,
            "slug": event.slug,
            "typeform_config": event.typeform_config.as_json() if event.typeform_config is not None else None,
        },
    )
    if result.error or result.data is None:
        record_event_write("create", success=False)
        message = result.error.message if result.error else "Event insert returned no row"
        raise WriteError(message, cause=result.error)

    record_event_write("create", success=True)
    logger.info("event_created", event_id=result.data["id"], slug=event.slug)
    return result.data


async def update_event(store: Store, event_id: str, changes: Mapping[str, Any]) -> dict:
    """
    Apply a partial update to one event and return the updated row.
    Raises ValidationError before any store call when nothing would change.
    """
    payload = build_update_payload(changes)
    if not payload:
        raise ValidationError("No valid fields provided to update")

    try:
        typed = EventUpdate.model_validate(payload)
    except PydanticValidationError as e:
        record_event_write("update", success=False)
        raise ValidationError(f"Invalid event data: {_first_error(e)}", cause=e) from e
    update_set = typed.model_dump(exclude_unset=True)

    result = await store.update(EVENTS_TABLE, update_set, {"id": event_id})
    if result.error:
        record_event_write("update", success=False)
        raise WriteError(result.error.message, cause=result.error)
    if not result.data:
        record_event_write("update", success=False)
        raise WriteError(f"Event {event_id} not found")

    record_event_write("update", success=True)
    logger.info("event_updated", event_id=event_id, fields=sorted(update_set))
    return result.data[0]


async def get_event(store: Store, event_id: str) -> Optional[dict]:
    """Read one event row, or None when it does not exist."""
    result = await store.select_one(EVENTS_TABLE, {"id": event_id})
    if result.error:
        raise WriteError(result.error.message, cause=result.error)
    return result.data


async def get_typeform_config(store: Store, event_id: str) -> Optional[TypeformConfig]:
    """Parsed field descriptors for an event; None when the event does not exist."""
    event = await get_event(store, event_id)
    if event is None:
        return None
    try:
        return TypeformConfig.model_validate(event.get("typeform_config") or [])
    except PydanticValidationError as e:
        raise ValidationError(f"Stored typeform_config for event {event_id} is invalid", cause=e) from e
