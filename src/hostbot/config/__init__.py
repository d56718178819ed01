"""Bot configuration: declarative schema, compiled model and help text."""

from .loader import compile_config, parse, parse_duration, parse_file
from .model import Argument, Auth, Command, Config, Group, Host, Item, PasswordAuth, PublicKeyAuth, Settings

__all__ = [
    "Argument",
    "Auth",
    "Command",
    "Config",
    "Group",
    "Host",
    "Item",
    "PasswordAuth",
    "PublicKeyAuth",
    "Settings",
    "compile_config",
    "parse",
    "parse_duration",
    "parse_file",
]
