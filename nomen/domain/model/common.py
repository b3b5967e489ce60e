"""Base for Nomen domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity; changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)
