"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Unit-of-work boundary shared by the repositories of one request.

    Everything done inside ``transaction()`` becomes visible together when
    the block exits normally and is discarded when it raises. Nested blocks
    behave like savepoints: an inner failure only discards the inner work.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction block.

        Usage:
            async with transaction_manager.transaction():
                ...
        """
        pass
