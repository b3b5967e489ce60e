"""Common ancestor of the domain services."""


class Service:
    """Stateless rules over accounts, profiles and merges.

    Services receive repositories and other services through their
    constructor. Opening transactions is left to the use cases that call
    them.
    """
