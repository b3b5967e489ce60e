"""Use case contract."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One operation exposed to routes and scripts.

    A use case takes a request model, runs domain services inside
    ``TransactionManager.transaction()`` and returns a response model.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Run the operation."""
