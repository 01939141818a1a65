from __future__ import annotations

import enum
from typing import Optional


class Kind(str, enum.Enum):
    """The slot a mechanism fills inside a Contact."""

    HOME = "HOME"
    WORK = "WORK"
    MOBILE = "MOBILE"
    BILLING = "BILLING"
    SHIPPING = "SHIPPING"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["Kind"]:
        try:
            return cls(normalize_kind(text))
        except ValueError:
            return None


class PartType(str, enum.Enum):
    """Identifies a contact attribute: its name or one of its mechanism types."""

    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    MAIL = "mail"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["PartType"]:
        try:
            return cls((text or "").strip())
        except ValueError:
            return None


# Kinds the API accepts for each mechanism type
ALLOWED_KINDS: dict[PartType, tuple[Kind, ...]] = {
    PartType.PHONE: (Kind.HOME, Kind.WORK, Kind.MOBILE),
    PartType.EMAIL: (Kind.HOME, Kind.WORK),
    PartType.MAIL: (Kind.HOME, Kind.WORK, Kind.BILLING, Kind.SHIPPING),
}


def normalize_kind(text: Optional[str]) -> str:
    return (text or "").strip().upper()
