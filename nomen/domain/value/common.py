"""Value object bases shared by the Nomen domain."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable record compared field by field.

    Used for results handed across service boundaries (merge and
    consolidation summaries, requester details).
    """

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one primitive, e.g. a merge token.

    ``model_dump()`` yields the bare value, so wrappers serialize as the
    primitive they hold.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
