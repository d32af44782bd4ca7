"""Emoji shown in console messages, with plain-text fallbacks."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class Emoji:
    """An emoji with a fallback for terminals that cannot show it."""

    unicode: str
    fallback: str

    def render(self, unicode_supported: bool) -> str:
        """Return the emoji, or its fallback when unicode is not supported."""
        return self.unicode if unicode_supported else self.fallback

    def __str__(self) -> str:
        return self.render(_stdout_supports(self.unicode))


def _stdout_supports(text: str) -> bool:
    encoding = getattr(sys.stdout, "encoding", None) or "ascii"
    try:
        text.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True


TARGET = Emoji("🎯  ", "")
CYCLONE = Emoji("🌀  ", "")
FOLDER = Emoji("📂  ", "")
MEMO = Emoji("📝  ", "")
DOWN_ARROW = Emoji("⬇️  ", "")
RUNNER = Emoji("🏃‍♀️  ", "")
SPARKLE = Emoji("✨  ", ":-)")
PACKAGE = Emoji("📦  ", ":-)")
WARN = Emoji("⚠️  ", ":-)")
DANCERS = Emoji("👯  ", "")
ERROR = Emoji("⛔  ", "")
INFO = Emoji("ℹ️  ", "")
WRENCH = Emoji("🔧  ", "")
CRAB = Emoji("🦀  ", "")
SHEEP = Emoji("🐑 ", "")