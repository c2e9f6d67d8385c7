from event_admin.models.event import Event
from event_admin.models.registration import Registration

__all__ = ["Event", "Registration"]
