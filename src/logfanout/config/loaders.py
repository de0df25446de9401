"""Config – settings sources (process environment, ``.env`` files)."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from logfanout.config.errors import InvalidSettingValueError
from logfanout.config.settings import Settings

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE | _FALSE)}")


_COERCERS: dict[Any, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
    str: str,
}


class SettingsLoader(abc.ABC):
    """Port: a source of setting values."""

    @abc.abstractmethod
    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        """Return the fields this source sets, already coerced to their types."""

    def load(self, settings_class: type[T]) -> T:
        """Build *settings_class* from this source alone, defaults elsewhere."""
        return settings_class(**self.values(settings_class))


class EnvSettingsLoader(SettingsLoader):
    """Reads ``<PREFIX>_<FIELD>`` variables from *environ* (``os.environ`` by default)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        found: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = settings_class.env_key(field.name)
            raw = environ.get(key)
            if raw is None:
                continue
            coerce = _COERCERS.get(hints.get(field.name), str)
            try:
                found[field.name] = coerce(raw.strip())
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc
        return found


class DotenvSettingsLoader(SettingsLoader):
    """Reads a ``.env`` file without touching ``os.environ``.

    Real environment variables win over the file unless *override* is set.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        try:
            from dotenv import dotenv_values  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'logfanout[dotenv]' to use DotenvSettingsLoader") from exc
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            environ = {**os.environ, **from_file}
        else:
            environ = {**from_file, **os.environ}
        return EnvSettingsLoader(environ).values(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
