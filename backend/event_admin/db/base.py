"""
Declarative base and shared column mixins.
"""

import uuid

from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


def generate_uuid() -> str:
    return str(uuid.uuid4())
