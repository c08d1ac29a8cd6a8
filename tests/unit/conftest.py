import pytest
from unittest.mock import AsyncMock, MagicMock


class ExpiringEntity:
    """Stand-in for a loaded ORM entity; attribute reads fail once expired"""

    def __init__(self, **fields):
        self.__dict__["_fields"] = fields
        self.__dict__["_expired"] = False

    def __getattr__(self, name):
        if self._expired:
            raise AssertionError(f"'{name}' read after the unit of work rolled back")
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(name)

    def expire(self):
        self.__dict__["_expired"] = True


@pytest.fixture
def mock_uow():
    """Mock unit of work (write conflicts are not retryable unless a test says so)"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.is_retryable = MagicMock(return_value=False)
    return uow


@pytest.fixture
def expire_on_rollback(mock_uow):
    """Expire the given entities when the unit of work rolls back, as a session does"""
    def _expire(*entities):
        def rollback():
            for entity in entities:
                entity.expire()

        mock_uow.rollback = AsyncMock(side_effect=rollback)

    return _expire


@pytest.fixture
def expiring_entity():
    return ExpiringEntity
