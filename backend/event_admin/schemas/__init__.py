from event_admin.schemas.event import EventCreate, EventUpdate, EventResponse
from event_admin.schemas.registration import RegistrationCreate, RegistrationResponse
from event_admin.schemas.typeform import TypeformConfig, TypeformFieldConfig, TypeformFieldView

__all__ = [
    "EventCreate", "EventUpdate", "EventResponse",
    "RegistrationCreate", "RegistrationResponse",
    "TypeformConfig", "TypeformFieldConfig", "TypeformFieldView",
]
