"""
FastAPI dependencies shared by the route modules.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from event_admin.db.session import get_db
from event_admin.infrastructure.sqlalchemy_store import SqlAlchemyStore
from event_admin.services.interfaces.store import Store


async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    return SqlAlchemyStore(db)
