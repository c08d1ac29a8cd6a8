from .unit_of_work import UnitOfWork, WriteConflictError

__all__ = [
    "UnitOfWork",
    "WriteConflictError",
]
