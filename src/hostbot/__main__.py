"""hostbot CLI bootstrap."""

from __future__ import annotations

from hostbot.cli import app

if __name__ == "__main__":
    app()
