from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ItemBrief(BaseModel):
    key: int
    type: str

    @classmethod
    def of(cls, item: Any) -> "ItemBrief":
        return cls(key=item.key, type=item.description())

    @classmethod
    def named(cls, contact: Any) -> "ItemBrief":
        return cls(key=contact.key, type=f"name={contact.name}")


class MechanismBody(BaseModel):
    """One of PhoneNumber {key, value}, EmailAddress {key, value} or
    MailAddress {key, street, office, city, state, zip}."""

    key: int = 0
    value: Optional[str] = None
    street: Optional[str] = None
    office: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None

    def is_mail(self) -> bool:
        return any(v is not None for v in (self.street, self.city, self.state, self.zip))


class ContactMechanismBody(BaseModel):
    type: str
    mechanism: MechanismBody


class ContactBody(BaseModel):
    key: int = 0
    name: str = ""
    mechanisms: list[ContactMechanismBody] = Field(default_factory=list)


class ItemPart(BaseModel):
    """A single-attribute update: ``description`` is ``[type, kind, value]``,
    or just ``["name"]`` to create a contact by name."""

    name: str = ""
    description: list[str] = Field(default_factory=list)

    def _at(self, index: int) -> str:
        return self.description[index] if len(self.description) > index else ""

    def part_type(self) -> str:
        return self._at(0)

    def kind(self) -> str:
        return self._at(1)

    def value(self) -> str:
        return self._at(2)
