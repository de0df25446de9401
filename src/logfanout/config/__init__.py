"""Config – 12-factor settings and the sources they are read from."""

from logfanout.config.errors import ConfigError, InvalidSettingValueError
from logfanout.config.factory import SettingsFactory, load_settings
from logfanout.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from logfanout.config.settings import LogfanoutSettings, Settings

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LogfanoutSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
