from __future__ import annotations

from contacts_service.domain.base import Hashed
from contacts_service.domain.kinds import PartType
from contacts_service.domain.normalize import validate_phone

FORMAT = "999-999-9999"
MESSAGE = "phone numbers must have a format like " + FORMAT


class PhoneNumber(Hashed):
    """A (unique) phone number, rendered as AAA-PPP-SSSS."""

    noun = "phone number"
    part_type = PartType.PHONE

    def __init__(self, area_code: str = "", prefix: str = "", suffix: str = ""):
        super().__init__()
        self._area_code = area_code
        self._prefix = prefix
        self._suffix = suffix

    @classmethod
    def from_text(cls, text: str) -> "PhoneNumber":
        if not validate_phone(text):
            raise ValueError(MESSAGE)
        return cls(*text.split("-"))

    @staticmethod
    def validate(text: str | None) -> list[str]:
        return [] if validate_phone(text) else [MESSAGE]

    @property
    def area_code(self) -> str:
        return self._area_code

    @area_code.setter
    def area_code(self, value: str) -> None:
        self._area_code = value
        self.mark_dirty()

    @property
    def prefix(self) -> str:
        return self._prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        self._prefix = value
        self.mark_dirty()

    @property
    def suffix(self) -> str:
        return self._suffix

    @suffix.setter
    def suffix(self, value: str) -> None:
        self._suffix = value
        self.mark_dirty()

    @property
    def value(self) -> str:
        return self.format_value()

    @value.setter
    def value(self, text: str) -> None:
        self._area_code, self._prefix, self._suffix = PhoneNumber.from_text(text).parts()
        self.mark_dirty()

    def parts(self) -> tuple[str, str, str]:
        return self._area_code, self._prefix, self._suffix

    def format_value(self) -> str:
        return f"{self._area_code}-{self._prefix}-{self._suffix}"
