"""
Service interfaces for dependency inversion.
Allows swapping storage backends without changing the writers.
"""

from .store import Store, StoreError, StoreResult, UNIQUE_VIOLATION

__all__ = ['Store', 'StoreError', 'StoreResult', 'UNIQUE_VIOLATION']
