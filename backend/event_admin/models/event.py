"""
Event model.

Key design decisions:
- `slug` is unique; the create path does not pre-check it, the insert fails instead
- `tags` and `typeform_config` are stored as JSON so ordering is preserved
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from event_admin.db.base import Base, TimestampMixin, generate_uuid


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    publish_date = Column(DateTime(timezone=True), nullable=True)
    venue = Column(String(255), nullable=True)
    banner_image = Column(String(1024), nullable=True)
    tags = Column(JSON, nullable=True)
    event_type = Column(String(100), nullable=True)
    is_featured = Column(Boolean, nullable=True, default=False)
    is_gated = Column(Boolean, nullable=False, default=False)
    always_approve = Column(Boolean, nullable=False, default=False)
    more_info = Column(Text, nullable=True)
    more_info_text = Column(Text, nullable=True)
    external_registration_link = Column(String(1024), nullable=True)
    rules = Column(Text, nullable=True)
    slug = Column(String(255), nullable=False)

    # Ordered list of field descriptors, see schemas.typeform
    typeform_config = Column(JSON, nullable=True)

    registrations = relationship("Registration", back_populates="event", lazy="noload")

    __table_args__ = (
        UniqueConstraint("slug", name="uq_events_slug"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, slug={self.slug})>"
