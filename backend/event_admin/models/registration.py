"""
Registration model representing one participant's (or team's) entry to an event.

Key design decisions:
- Unique index on (event_id, application_id) when an application is attached
- Partial unique index on (event_id, registration_email) for rows without one
- No status/update columns: rows are written once and never mutated here
"""

from sqlalchemy import Column, String, Boolean, ForeignKey, JSON, Index, text
from sqlalchemy.orm import relationship

from event_admin.db.base import Base, TimestampMixin, generate_uuid


class Registration(Base, TimestampMixin):
    __tablename__ = "eventsregistrations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    application_id = Column(String(36), nullable=True)
    registration_email = Column(String(255), nullable=True)
    attendance = Column(Boolean, nullable=True, default=False)
    is_approved = Column(Boolean, nullable=True)
    is_team_entry = Column(Boolean, nullable=True, default=False)
    details = Column(JSON, nullable=True)  # field id -> value, keyed by the event's typeform_config
    ticket_id = Column(String(64), nullable=True)
    event_title = Column(String(255), nullable=True)

    event = relationship("Event", back_populates="registrations", lazy="noload")

    __table_args__ = (
        Index(
            "uq_registration_event_application",
            "event_id",
            "application_id",
            unique=True,
        ),
        Index(
            "uq_registration_event_email",
            "event_id",
            "registration_email",
            unique=True,
            postgresql_where=text("application_id IS NULL"),
            sqlite_where=text("application_id IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Registration(id={self.id}, event={self.event_id}, application={self.application_id})>"
