"""
Admin typeform config editor.

Takes the two raw form inputs (event id, JSON text), parses the JSON
locally and pushes it onto the event through the event writer. The result
is a notification for the admin page. Input problems never reach the store.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from event_admin.core.errors import EventAdminError, InputError
from event_admin.core.logging import get_logger
from event_admin.core.metrics import record_config_submission
from event_admin.services.event_service import update_event
from event_admin.services.interfaces.store import Store

logger = get_logger(__name__)

MISSING_INPUT_MESSAGE = "Please provide both Event ID and Typeform Config JSON"
FALLBACK_ERROR_MESSAGE = "Failed to update event config. Please check your JSON format."


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"  # default, destructive


@dataclass
class SubmissionResult:
    success: bool
    notification: Notification
    event: Optional[dict] = None


def parse_config_input(event_id: str, raw_config: str) -> Any:
    """Check both inputs are present and decode the JSON text."""
    if not event_id or not raw_config:
        raise InputError(MISSING_INPUT_MESSAGE)
    try:
        return json.loads(raw_config)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON: {e}", cause=e) from e


async def submit_typeform_config(store: Store, event_id: str, raw_config: str) -> SubmissionResult:
    """One submission attempt; never raises for writer or input errors."""
    event_id = (event_id or "").strip()
    try:
        parsed = parse_config_input(event_id, raw_config)
    except InputError as e:
        record_config_submission("input_error")
        logger.warning("typeform_config_input_rejected", event_id=event_id, error=e.message)
        title = "Missing Information" if e.cause is None else "Error"
        return SubmissionResult(
            success=False,
            notification=Notification(title=title, description=e.message, variant="destructive"),
        )

    try:
        event = await update_event(store, event_id, {"typeform_config": parsed})
    except EventAdminError as e:
        record_config_submission("error")
        logger.error("typeform_config_update_failed", event_id=event_id, kind=e.kind.value, error=e.message)
        return SubmissionResult(
            success=False,
            notification=Notification(
                title="Error",
                description=e.message or FALLBACK_ERROR_MESSAGE,
                variant="destructive",
            ),
        )

    record_config_submission("success")
    return SubmissionResult(
        success=True,
        notification=Notification(
            title="Success!",
            description="Event typeform_config has been updated successfully.",
        ),
        event=event,
    )
