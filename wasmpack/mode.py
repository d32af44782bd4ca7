"""Install modes selecting which setup steps run."""

from __future__ import annotations

import enum


class InstallMode(enum.Enum):
    """Which install steps are performed."""

    NORMAL = "normal"
    NOINSTALL = "no-install"
    FORCE = "force"

    @classmethod
    def parse(cls, text: str) -> "InstallMode":
        """Parse a ``--mode`` value."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown build mode: {text}") from None

    def install_permitted(self) -> bool:
        """Whether tools may be downloaded or installed in this mode."""
        return self is not InstallMode.NOINSTALL