from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from contacts_service.domain.base import Hashed
from contacts_service.domain.email import EmailAddress
from contacts_service.domain.kinds import ALLOWED_KINDS, Kind, PartType
from contacts_service.domain.mail import MailAddress
from contacts_service.domain.normalize import normalize_code, normalize_words
from contacts_service.domain.phone import PhoneNumber

logger = logging.getLogger(__name__)

Mechanism = Union[PhoneNumber, EmailAddress, MailAddress]

NAME_MESSAGE = "contact name too short or long"
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

WILD = "%"

MECHANISM_TYPES: dict[PartType, type] = {
    PartType.PHONE: PhoneNumber,
    PartType.EMAIL: EmailAddress,
    PartType.MAIL: MailAddress,
}


@dataclass
class ContactMechanism:
    """A mechanism tagged with the kind of slot it fills."""

    kind: Kind
    mechanism: Mechanism

    @property
    def part_type(self) -> PartType:
        return self.mechanism.part_type

    def description(self) -> str:
        return self.mechanism.format_fully(self.kind.value)


def format_duplicate(item: Hashed) -> str:
    return f"'{item.format_value()}' duplicates existing {item.noun}"


class Contact(Hashed):
    """A (unique) named composite of contact mechanisms.

    The name is fixed once the contact is created; its phones, emails and
    addresses are kind-keyed maps of shared, de-duplicated values.
    """

    noun = "contact"

    def __init__(self, name: str = ""):
        super().__init__()
        self._name = normalize_words(name)
        self.phones: dict[Kind, PhoneNumber] = {}
        self.emails: dict[Kind, EmailAddress] = {}
        self.addresses: dict[Kind, MailAddress] = {}

    @classmethod
    def named(cls, name: str) -> "Contact":
        return cls(name)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = normalize_words(value)
        self.mark_dirty()

    def format_value(self) -> str:
        return self._name

    def likeness(self) -> str:
        return WILD if not self._name else f"{WILD}{self._name}{WILD}"

    def validate(self) -> list[str]:
        if not NAME_MIN_LENGTH <= len(self._name) <= NAME_MAX_LENGTH:
            return [NAME_MESSAGE]
        return []

    # ---- mechanisms ----

    def slots(self, part_type: PartType) -> dict:
        if part_type is PartType.PHONE:
            return self.phones
        if part_type is PartType.EMAIL:
            return self.emails
        if part_type is PartType.MAIL:
            return self.addresses
        raise ValueError(f"{part_type.value} is not a mechanism type")

    def slot_maps(self) -> tuple[dict, dict, dict]:
        return self.phones, self.emails, self.addresses

    @property
    def mechanisms(self) -> list[ContactMechanism]:
        results = [ContactMechanism(kind, item) for kind, item in self.addresses.items()]
        results.extend(ContactMechanism(kind, item) for kind, item in self.phones.items())
        results.extend(ContactMechanism(kind, item) for kind, item in self.emails.items())
        return results

    def adopt(self, mechanisms: Iterable[ContactMechanism]) -> "Contact":
        for m in mechanisms:
            self.slots(m.part_type)[m.kind] = m.mechanism
        return self

    def with_phone(self, kind: Kind, phone: Optional[PhoneNumber]) -> "Contact":
        return self._put(self.phones, kind, phone)

    def with_email(self, kind: Kind, email: Optional[EmailAddress]) -> "Contact":
        return self._put(self.emails, kind, email)

    def with_address(self, kind: Kind, address: Optional[MailAddress]) -> "Contact":
        return self._put(self.addresses, kind, address)

    def _put(self, slots: dict, kind: Kind, item: Optional[Hashed]) -> "Contact":
        if item is None:
            slots.pop(kind, None)
        else:
            slots[kind] = item
        return self

    def merge_phone(self, kind: Kind, text: Optional[str], messages: list[str]) -> None:
        self.merge(PartType.PHONE, kind, text, messages)

    def merge_email(self, kind: Kind, text: Optional[str], messages: list[str]) -> None:
        self.merge(PartType.EMAIL, kind, text, messages)

    def merge_address(self, kind: Kind, text: Optional[str], messages: list[str]) -> None:
        self.merge(PartType.MAIL, kind, text, messages)

    def merge(self, part_type: PartType, kind: Kind, text: Optional[str], messages: list[str]) -> None:
        """Merge a mechanism given as text into the slot for ``kind``.

        Empty text clears the slot. Invalid text reports ``"<KIND> <message>"``
        and leaves the slot alone. Otherwise the slot gets a new (unsaved)
        value unless it already holds one with the same canonical form.
        """
        slots = self.slots(part_type)
        if not text:
            slots.pop(kind, None)
            return

        item_type = MECHANISM_TYPES[part_type]
        notes = item_type.validate(text)
        if notes:
            messages.append(f"{kind.value} {notes[0]}")
            return

        current = slots.get(kind)
        if current is None or current.format_value() != text:
            slots[kind] = item_type.from_text(text)

    # ---- lifecycle ----

    def save_item(self, db: Session) -> "Contact":
        """Save every mechanism, then this contact, returning the stored contact."""
        for slots in self.slot_maps():
            for kind, item in list(slots.items()):
                slots[kind] = item.save_item(db)

        store = self.storage(db)
        if self.key:
            return store.save(self)

        existing = self.find_with_hash(db)
        if existing is not None:
            logger.debug("Contact %s already stored", existing.description())
            return existing
        return store.save(self)

    def check_parts(self, db: Session) -> list[str]:
        """Report values that would duplicate stored rows if written as new."""
        messages = []
        if not self.key and self.find_with_hash(db) is not None:
            messages.append(format_duplicate(self))

        for part_type, kinds in ALLOWED_KINDS.items():
            slots = self.slots(part_type)
            for kind in kinds:
                item = slots.get(kind)
                if item is not None and not item.key and item.find_with_hash(db) is not None:
                    messages.append(format_duplicate(item))
        return messages

    def discard_stale_keys(self, db: Session) -> None:
        """Forget keys of mechanisms whose stored row no longer matches them."""
        for slots in self.slot_maps():
            for item in slots.values():
                if not item.key:
                    continue
                stored = item.storage(db).find_by_id(item.key)
                if stored is None or stored.format_value() != item.format_value():
                    item.mark_dirty()

    def describe(self) -> None:
        logger.info(self.hash_description())
        for m in self.mechanisms:
            logger.info(m.description())

    # ---- finders ----

    @classmethod
    def find(cls, db: Session, name: str) -> Optional["Contact"]:
        return cls.named(name).find_with_hash(db)

    @classmethod
    def find_key(cls, db: Session, key: int) -> Optional["Contact"]:
        return cls.storage(db).find_by_id(key)

    @classmethod
    def find_first(cls, db: Session) -> Optional["Contact"]:
        return cls.storage(db).find_first()

    @classmethod
    def find_all(cls, db: Session) -> list["Contact"]:
        return cls.storage(db).find_all()

    @classmethod
    def find_named(cls, db: Session, name: str) -> list["Contact"]:
        found = cls.find(db, name)
        return [] if found is None else [found]

    @classmethod
    def like(cls, db: Session, text: Optional[str]) -> list["Contact"]:
        return cls.storage(db).find_like(cls.named(text or "").likeness())

    @classmethod
    def find_matching(cls, db: Session, name: Optional[str], city: Optional[str] = None, zip: Optional[str] = None) -> list["Contact"]:
        city_text = normalize_words(city)
        return cls.storage(db).find_matching(
            cls.named(name or "").likeness(),
            city=f"{WILD}{city_text}{WILD}" if city_text else None,
            zip=normalize_code(zip) or None,
        )

    @classmethod
    def find_similar(cls, db: Session, item: Mechanism) -> list["Contact"]:
        store = cls.storage(db)
        if item.part_type is PartType.PHONE:
            return store.find_by_phone_hash(item.digest())
        if item.part_type is PartType.EMAIL:
            return store.find_by_email_hash(item.digest())
        return store.find_by_address_hash(item.digest())

    @classmethod
    def find_similar_phone(cls, db: Session, phone: PhoneNumber) -> list["Contact"]:
        return cls.storage(db).find_by_phone_hash(phone.digest())

    @classmethod
    def find_similar_email(cls, db: Session, email: EmailAddress) -> list["Contact"]:
        return cls.storage(db).find_by_email_hash(email.digest())

    @classmethod
    def find_similar_address(cls, db: Session, address: MailAddress) -> list["Contact"]:
        return cls.storage(db).find_by_address_hash(address.digest())
