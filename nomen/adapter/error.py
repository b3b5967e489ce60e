"""Failures talking to systems outside nomen."""


class AdapterError(Exception):
    """An external system failed or answered unexpectedly."""


class DirectoryError(AdapterError):
    """The gateway admin API could not delete a principal.

    Surfaces as 502, since the caller's request was well formed.
    """
