"""Canonicalization and validation of free-text input.

Every function here is pure and total: ``None`` is accepted wherever text is,
and nothing returns ``None`` except ``parse_mail_address`` on a malformed
address.
"""

from __future__ import annotations

import re
import unicodedata
from typing import NamedTuple, Optional

from email_validator import EmailNotValidError, validate_email as _validate_email

ALLOWED_SYMBOLS = "/#"

PHONE_PATTERN = re.compile(r"(\d{3})-(\d{3})-(\d{4})", re.ASCII)


class AddressParts(NamedTuple):
    street: str
    office: str
    city: str
    state: str
    zip: str


def _filtered(ch: str) -> bool:
    # Unicode symbols (S*) and punctuation (P*), except the allowed ones
    return ch not in ALLOWED_SYMBOLS and unicodedata.category(ch)[0] in "SP"


def normalize_words(text: Optional[str]) -> str:
    """Capitalize each word, drop punctuation and squeeze whitespace.

    >>> normalize_words("  george   JUNGLEMAN, jr.")
    'George Jungleman Jr'
    """
    if not text:
        return ""
    words = [w[:1].upper() + w[1:].lower() for w in text.split()]
    stripped = "".join(ch for ch in " ".join(words) if not _filtered(ch))
    return " ".join(stripped.split())


def normalize_code(text: Optional[str]) -> str:
    return (text or "").strip().upper()


def validate_phone(text: Optional[str]) -> bool:
    return text is not None and PHONE_PATTERN.fullmatch(text) is not None


def validate_email(text: Optional[str]) -> bool:
    if not text or text.count("@") != 1:
        return False
    try:
        _validate_email(text, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def parse_mail_address(text: Optional[str]) -> Optional[AddressParts]:
    """Split a comma-separated mail address into its parts.

    Accepted forms::

        street, city, ST zip
        street, office, city, ST zip
        street, city, ST, zip
        street, office, city, ST, zip
    """
    if not text or "," not in text:
        return None

    parts = [p.strip() for p in text.split(",")]
    if len(parts) == 3:
        state_zip = parts[2].split(None, 1)
        if len(state_zip) < 2:
            return None
        return AddressParts(parts[0], "", parts[1], state_zip[0], state_zip[1])

    if len(parts) == 4:
        state_zip = parts[3].split(None, 1)
        if len(state_zip) == 2:
            return AddressParts(parts[0], parts[1], parts[2], state_zip[0], state_zip[1])
        return AddressParts(parts[0], "", parts[1], parts[2], parts[3])

    if len(parts) == 5:
        return AddressParts(*parts)

    return None
