"""
Infrastructure layer - external system integrations.
Keeps the writers clean from database implementation details.
"""

from .sqlalchemy_store import SqlAlchemyStore

__all__ = ['SqlAlchemyStore']
