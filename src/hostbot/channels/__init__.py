"""Chat channel adapters."""

from .telegram import TelegramChannel, TelegramConfig

__all__ = ["TelegramChannel", "TelegramConfig"]
