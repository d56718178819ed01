"""Application-level exception types for hostbot."""

from __future__ import annotations


class HostbotError(Exception):
    """Base exception for hostbot."""


class ConfigError(HostbotError):
    """Raised when the bot configuration cannot be compiled."""


class CommandFormatError(HostbotError):
    """Raised when a command template does not accept its argument values."""


class ExecutionError(HostbotError):
    """Raised when a remote command cannot be run or exits with failure."""
