"""Outcome of a single datastore read, as seen by a page.

A page starts out `pending` and ends up either `loaded` with a value or
`failed` with the error that stopped it. Keeping the failure around means a
missing recipe can be told apart from one that is still on its way.
"""

from enum import Enum
import logging
from typing import Awaitable

from cookbook.domain.errors import DatastoreError, RecipeNotFound


logger = logging.getLogger(__name__)


class Status(Enum):
    pending = "pending"
    loaded = "loaded"
    failed = "failed"


class Result[T]:
    def __init__(
        self,
        status: Status,
        *,
        value: T | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status = status
        self.value = value
        self.error = error

    def __repr__(self) -> str:
        return f"<Result(status={self.status.value})>"

    @classmethod
    def pending(cls) -> "Result[T]":
        return cls(Status.pending)

    @classmethod
    def loaded(cls, value: T) -> "Result[T]":
        return cls(Status.loaded, value=value)

    @classmethod
    def failed(cls, error: Exception) -> "Result[T]":
        return cls(Status.failed, error=error)

    @classmethod
    async def of(cls, awaitable: Awaitable[T]) -> "Result[T]":
        """Await a read, capturing datastore errors instead of raising them."""
        try:
            value = await awaitable
        except RecipeNotFound as e:
            logger.info("Not found: %s", e)
            return cls.failed(e)
        except DatastoreError as e:
            logger.exception("Read failed")
            return cls.failed(e)
        return cls.loaded(value)

    @property
    def is_pending(self) -> bool:
        return self.status is Status.pending

    @property
    def is_loaded(self) -> bool:
        return self.status is Status.loaded

    @property
    def is_failed(self) -> bool:
        return self.status is Status.failed

    @property
    def is_not_found(self) -> bool:
        return self.is_failed and isinstance(self.error, RecipeNotFound)

    @property
    def reason(self) -> str:
        return "" if self.error is None else str(self.error)
