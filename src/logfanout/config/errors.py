"""Config errors."""
from __future__ import annotations

from logfanout.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or are inconsistent."""

    default_code = "config_error"


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable.

    The offending value is kept on the instance but left out of ``detail``
    so connection strings never reach the logs.
    """

    default_code = "invalid_setting"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError"]
