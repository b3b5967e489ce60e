"""Provider metadata shared by every dishka provider in nomen."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a production and an in-memory variant
Component = Literal["persistence", "directory"]


class ProviderBase(Provider):
    """Provider carrying the flags the container builder selects on.

    A swappable component declares a base with ``__mock_component__`` set,
    then one subclass per variant with ``__is_mock__`` set accordingly.
    Providers without subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
