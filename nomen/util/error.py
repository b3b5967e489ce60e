"""Errors raised while wiring the service from its settings."""


class UtilError(Exception):
    """Base class for wiring errors."""


class ConfigurationError(UtilError):
    """A setting is missing or still holds a placeholder.

    Attributes:
        setting: Environment variable the operator has to set
    """

    def __init__(self, setting: str, problem: str = "must be configured") -> None:
        self.setting = setting
        super().__init__(f"{setting} {problem}")
