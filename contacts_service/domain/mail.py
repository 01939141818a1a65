from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from contacts_service.domain.base import Hashed
from contacts_service.domain.kinds import PartType
from contacts_service.domain.normalize import AddressParts, normalize_code, normalize_words, parse_mail_address

FORMAT = "1234 Main St, Los Angeles, CA 90066"
MESSAGE = "mail addresses must have a format like " + FORMAT


class MailFields(BaseModel):
    """Column rules for a normalized mail address."""

    street: str = Field(max_length=50, pattern=r"^((\d+\s)[\w\s/#]+)?$")
    office: str = Field(max_length=50, pattern=r"^[\w\s/#]*$")
    city: str = Field(min_length=5, max_length=50, pattern=r"^[a-zA-Z\s]+$")
    state: str = Field(pattern=r"^[A-Z]{2}$")
    zip: str = Field(min_length=5, max_length=15, pattern=r"^[\w\s]+$")


class MailAddress(Hashed):
    """A (unique) mailing address.

    Street, office and city are normalized as words; state and postal codes
    are trimmed and upper-cased. The canonical form is
    ``street, [office, ]city, ST zip``.
    """

    noun = "mail address"
    part_type = PartType.MAIL

    def __init__(self, street: str = "", office: str = "", city: str = "", state_code: str = "", postal_code: str = ""):
        super().__init__()
        self._street = normalize_words(street)
        self._office = normalize_words(office)
        self._city = normalize_words(city)
        self._state_code = normalize_code(state_code)
        self._postal_code = normalize_code(postal_code)

    @classmethod
    def from_parts(cls, parts: AddressParts) -> "MailAddress":
        return cls(parts.street, parts.office, parts.city, parts.state, parts.zip)

    @classmethod
    def from_text(cls, text: str) -> Optional["MailAddress"]:
        parts = parse_mail_address(text)
        return None if parts is None else cls.from_parts(parts)

    @staticmethod
    def validate(text: str | None) -> list[str]:
        address = MailAddress.from_text(text) if text else None
        if address is None:
            return [MESSAGE]
        return address.problems()

    def problems(self) -> list[str]:
        try:
            MailFields(
                street=self._street,
                office=self._office,
                city=self._city,
                state=self._state_code,
                zip=self._postal_code,
            )
        except ValidationError:
            return [MESSAGE]
        return []

    @property
    def street(self) -> str:
        return self._street

    @street.setter
    def street(self, value: str) -> None:
        self._street = normalize_words(value)
        self.mark_dirty()

    @property
    def office(self) -> str:
        return self._office

    @office.setter
    def office(self, value: str) -> None:
        self._office = normalize_words(value)
        self.mark_dirty()

    @property
    def city(self) -> str:
        return self._city

    @city.setter
    def city(self, value: str) -> None:
        self._city = normalize_words(value)
        self.mark_dirty()

    @property
    def state_code(self) -> str:
        return self._state_code

    @state_code.setter
    def state_code(self, value: str) -> None:
        self._state_code = normalize_code(value)
        self.mark_dirty()

    @property
    def postal_code(self) -> str:
        return self._postal_code

    @postal_code.setter
    def postal_code(self, value: str) -> None:
        self._postal_code = normalize_code(value)
        self.mark_dirty()

    def format_value(self) -> str:
        if self._office:
            return f"{self._street}, {self._office}, {self._city}, {self._state_code} {self._postal_code}"
        return f"{self._street}, {self._city}, {self._state_code} {self._postal_code}"
