"""Unit of Work Interface

Bounds one database transaction. Use cases commit on success and roll back
on any failure so no partial write survives.
"""

from abc import ABC, abstractmethod


class WriteConflictError(Exception):
    """A guarded write matched no row because a concurrent transaction changed it first"""


class UnitOfWork(ABC):

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    def is_retryable(self, error: Exception) -> bool:
        """
        Whether a failed attempt may be re-run from scratch

        Implementations extend this with store-specific lock and
        serialization failures.
        """
        return isinstance(error, WriteConflictError)
