"""
Table store interface.

The writers talk to the database only through this interface, so they can
be exercised against any backend that reports results as data-or-error
instead of raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# SQLSTATE for unique_violation. Backends map their own duplicate-key signal onto it.
UNIQUE_VIOLATION = "23505"


@dataclass(frozen=True)
class StoreError:
    message: str
    code: Optional[str] = None


@dataclass(frozen=True)
class StoreResult:
    data: Any = None
    error: Optional[StoreError] = None


class Store(ABC):
    """
    Interface for table-oriented stores.

    Implementations:
    - SqlAlchemyStore: async SQLAlchemy session over the ORM models
    """

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> StoreResult:
        """
        Insert one row and return it.

        Returns:
            StoreResult with the inserted row as a dict, or an error
        """
        pass

    @abstractmethod
    async def update(
        self,
        table: str,
        changes: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> StoreResult:
        """
        Apply changes to every row matching all equality filters.

        Returns:
            StoreResult with the list of updated rows (possibly empty), or an error
        """
        pass

    @abstractmethod
    async def select_one(self, table: str, filters: Mapping[str, Any]) -> StoreResult:
        """
        Read at most one row matching all equality filters.

        Returns:
            StoreResult with the row or None; an error if several rows match
        """
        pass

    def is_duplicate_key_conflict(self, error: Optional[StoreError]) -> bool:
        """Whether the error is a uniqueness-constraint violation."""
        return error is not None and error.code == UNIQUE_VIOLATION
