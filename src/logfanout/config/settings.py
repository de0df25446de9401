"""Config – settings dataclasses."""
from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta
from typing import ClassVar

from logfanout.config.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base for 12-factor settings; every field must have a default.

    Subclasses set ``_prefix`` and may override ``_validate``, which runs
    after construction and may normalise fields in place.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable that feeds *field_name*."""
        if not cls._prefix:
            return field_name.upper()
        return f"{cls._prefix}_{field_name}".upper()


@dataclasses.dataclass
class LogfanoutSettings(Settings):
    """Runtime settings, read from ``LOGFANOUT_*`` environment variables."""

    _prefix: ClassVar[str] = "LOGFANOUT"

    delivery_timeout_seconds: float = 2.0
    max_subscriber_backlog: int = 1000
    log_level: str = "INFO"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "logfanout"
    mongo_collection: str = "logs"
    stats_window_hours: int = 24

    def _validate(self) -> None:
        if self.delivery_timeout_seconds <= 0:
            raise InvalidSettingValueError(
                "delivery_timeout_seconds", self.delivery_timeout_seconds, "must be > 0"
            )
        if self.max_subscriber_backlog < 1:
            raise InvalidSettingValueError(
                "max_subscriber_backlog", self.max_subscriber_backlog, "must be >= 1"
            )
        if self.stats_window_hours < 1:
            raise InvalidSettingValueError(
                "stats_window_hours", self.stats_window_hours, "must be >= 1"
            )
        level = self.log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")
        self.log_level = level

    @property
    def stats_window(self) -> timedelta:
        return timedelta(hours=self.stats_window_hours)


__all__ = ["LogfanoutSettings", "Settings"]
