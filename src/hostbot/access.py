"""Chat-side permission checks."""

from __future__ import annotations

from hostbot.config.model import Settings

USER_DENIED = "You don't have enough permissions"
CHANNEL_DENIED = "This channel doesn't have enough permissions"


def check_access(settings: Settings, user_id: str, chat_id: str) -> str | None:
    """Return the denial message for this sender, or ``None`` when allowed.

    Admins pass every check. Empty user or channel lists allow everyone.
    """

    if user_id in settings.admins:
        return None
    if settings.users and user_id not in settings.users:
        return USER_DENIED
    if settings.channels and chat_id not in settings.channels:
        return CHANNEL_DENIED
    return None
