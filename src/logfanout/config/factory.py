"""Config – merging settings sources."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from logfanout.config.errors import ConfigError
from logfanout.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from logfanout.config.settings import LogfanoutSettings, Settings
from logfanout.observability.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Layer several sources into one settings instance.

    Later loaders win over earlier ones, *overrides* win over every loader,
    and fields nobody sets keep their defaults.  A loader that raises
    :class:`ConfigError` is logged and skipped unless *strict* is set.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
        *,
        strict: bool = False,
    ) -> T:
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                merged.update(loader.values(settings_cls))
            except ConfigError as exc:
                if strict:
                    raise
                logger.warning("settings_source_skipped", loader=type(loader).__name__, **exc.log_fields())
        if overrides:
            merged.update(overrides)
        try:
            return settings_cls(**merged)
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}") from exc


def load_settings(env_file: str | None = None) -> LogfanoutSettings:
    """Settings for a running process: optional ``.env`` file, then the environment.

    Any bad value aborts startup with :class:`ConfigError`.
    """
    loaders: list[SettingsLoader] = []
    if env_file is not None:
        loaders.append(DotenvSettingsLoader(env_file))
    loaders.append(EnvSettingsLoader())
    return SettingsFactory.create(LogfanoutSettings, loaders, strict=True)


__all__ = ["SettingsFactory", "load_settings"]
