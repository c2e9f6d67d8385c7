"""
Registration writer with idempotent "register once" semantics.

CONCURRENCY STRATEGY: Write First, Read On Conflict
====================================================

Problem:
  A participant double-clicks submit, or has the form open in two tabs.
  A "does a registration exist?" check followed by an insert is racy:
  both requests see no row, both insert.

Solution:
  The store enforces uniqueness with two indexes on eventsregistrations:
    - (event_id, application_id)
    - (event_id, registration_email) for rows without an application_id

  1. INSERT the registration and request the row back
  2. Row returned -> done, a new registration
  3. Duplicate-key conflict -> one reconciliation read:
       application_id present: WHERE event_id = :event AND application_id = :app
       otherwise:              WHERE event_id = :event AND registration_email = :email
                                 AND application_id IS NULL
     Row found -> return it, the caller gets the existing registration
     No row    -> ReconciliationError
  4. Any other failure -> WriteError

  This approach:
  - Costs one round-trip in the common case (no pre-check read)
  - Is correct under concurrency because the database arbitrates, not the app
  - Never retries beyond the single reconciliation read

  The application id always wins over the email when choosing the
  reconciliation filter; both are never checked.
"""

from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from event_admin.core.errors import ReconciliationError, ValidationError, WriteError
from event_admin.core.logging import get_logger
from event_admin.core.metrics import record_registration, registration_latency
from event_admin.schemas.registration import RegistrationCreate
from event_admin.services.interfaces.store import Store, StoreError

logger = get_logger(__name__)

REGISTRATIONS_TABLE = "eventsregistrations"


def reconciliation_filters(registration: RegistrationCreate) -> dict[str, Any]:
    """Filters identifying the row that caused a duplicate-key conflict."""
    if registration.application_id:
        return {
            "event_id": registration.event_id,
            "application_id": registration.application_id,
        }
    return {
        "event_id": registration.event_id,
        "registration_email": registration.registration_email,
        "application_id": None,
    }


async def send_event_registration(
    store: Store,
    registration_data: Mapping[str, Any] | RegistrationCreate,
) -> dict:
    """
    Register a participant for an event exactly once.
    Returns the new row, or the existing one if this identity already registered.
    """
    try:
        registration = RegistrationCreate.model_validate(registration_data)
    except PydanticValidationError as e:
        record_registration("error")
        raise ValidationError("Invalid registration data", cause=e) from e

    with registration_latency.time():
        result = await store.insert(REGISTRATIONS_TABLE, registration.model_dump())

        if result.data is not None and result.error is None:
            record_registration("created")
            logger.info(
                "registration_created",
                registration_id=result.data["id"],
                event_id=registration.event_id,
                application_id=registration.application_id,
            )
            return result.data

        if store.is_duplicate_key_conflict(result.error):
            return await _reconcile(store, registration, result.error)

    record_registration("error")
    message = result.error.message if result.error and result.error.message else "Registration failed"
    raise WriteError(message, cause=result.error)


async def _reconcile(store: Store, registration: RegistrationCreate, conflict: StoreError) -> dict:
    filters = reconciliation_filters(registration)
    existing = await store.select_one(REGISTRATIONS_TABLE, filters)

    if existing.data:
        record_registration("existing")
        logger.info(
            "registration_reconciled",
            registration_id=existing.data["id"],
            event_id=registration.event_id,
            matched_on="application_id" if "registration_email" not in filters else "registration_email",
        )
        return existing.data

    record_registration("unreconciled")
    message = "Duplicate detected but existing row not found"
    if existing.error and existing.error.message:
        message = f"{message}: {existing.error.message}"
    raise ReconciliationError(message, cause=existing.error or conflict)
