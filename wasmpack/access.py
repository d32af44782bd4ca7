"""Access levels for published packages."""

from __future__ import annotations

import enum


class Access(enum.Enum):
    """Who may install the published package."""

    PUBLIC = "public"
    RESTRICTED = "restricted"

    @classmethod
    def parse(cls, text: str) -> "Access":
        """Parse an ``--access`` value; ``private`` means restricted."""
        if text == "private":
            return cls.RESTRICTED
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"{text} is not a supported access level. See "
                "https://docs.npmjs.com/cli/access for more information on "
                "npm package access levels."
            ) from None

    def __str__(self) -> str:
        return f"--access={self.value}"