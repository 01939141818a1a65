from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from contacts_service.core.errors import PartsConflict
from contacts_service.domain.contact import MECHANISM_TYPES, Contact
from contacts_service.domain.kinds import ALLOWED_KINDS, Kind, PartType
from contacts_service.schemas.contact import ContactBody, ItemBrief, ItemPart
from contacts_service.services.contact_codec import decode_contact

logger = logging.getLogger(__name__)

GONE = 410


def _gone(detail: str = "Contact not found") -> HTTPException:
    return HTTPException(status_code=GONE, detail=detail)


def count_contacts(db: Session) -> ItemBrief:
    return ItemBrief(key=Contact.count(db), type="Contact.count")


def find_first_contact(db: Session) -> Contact:
    contact = Contact.find_first(db)
    if contact is None:
        raise _gone()
    return contact


def list_briefs(db: Session, name: Optional[str]) -> list[ItemBrief]:
    contacts = Contact.like(db, name) if name else Contact.find_all(db)
    return [ItemBrief.named(c) for c in contacts]


def list_contacts(db: Session, *, name: Optional[str], city: Optional[str] = None, zip: Optional[str] = None) -> list[Contact]:
    return Contact.find_matching(db, name, city=city, zip=zip)


def get_contact(db: Session, key: int) -> Contact:
    contact = Contact.find_key(db, key)
    if contact is None:
        raise _gone()
    return contact


def _lookup(db: Session, id_type: PartType, text: str) -> list[Contact]:
    if id_type is PartType.NAME:
        return Contact.find_named(db, text)

    item_type = MECHANISM_TYPES[id_type]
    notes = item_type.validate(text)
    if notes:
        raise PartsConflict(notes)
    return Contact.find_similar(db, item_type.from_text(text))


def find_with_hash(db: Session, *, id_type: PartType, text: str) -> list[Contact]:
    return _lookup(db, id_type, text)


def _check(db: Session, contact: Contact, messages: list[str]) -> None:
    messages.extend(contact.validate())
    contact.discard_stale_keys(db)
    messages.extend(contact.check_parts(db))
    if messages:
        raise PartsConflict(messages)


def create_contact(db: Session, body: ContactBody) -> ItemBrief:
    messages: list[str] = []
    contact = decode_contact(body, messages)
    contact.key = 0
    _check(db, contact, messages)

    saved = contact.save_item(db)
    db.commit()
    logger.info("Created %s", saved.hash_description())
    return ItemBrief.of(saved)


def update_contact(db: Session, body: ContactBody) -> ItemBrief:
    if not body.key:
        raise PartsConflict(["a contact key is required for an update"])

    current = Contact.find_key(db, body.key)
    if current is None:
        raise _gone()

    messages: list[str] = []
    contact = decode_contact(body, messages)
    if contact.name != current.name:
        messages.append(f"'{contact.name}' does not match existing contact '{current.name}'")
    _check(db, contact, messages)

    saved = contact.save_item(db)
    db.commit()
    logger.info("Updated %s", saved.hash_description())
    return ItemBrief.of(saved)


def check_contact(db: Session, payload: Any) -> list[str]:
    if payload is None:
        raise _gone("Malformed contact")
    try:
        body = ContactBody.model_validate(payload)
    except ValidationError:
        raise _gone("Malformed contact")

    messages: list[str] = []
    contact = decode_contact(body, messages)
    messages.extend(contact.validate())
    messages.extend(contact.check_parts(db))
    if messages:
        raise PartsConflict(messages)
    return messages


def delete_contact(db: Session, key: int) -> bool:
    contact = Contact.find_key(db, key)
    if contact is None:
        return False
    contact.remove_item(db)
    db.commit()
    logger.info("Deleted %s", contact.hash_description())
    return True


def delete_with_hash(db: Session, *, id_type: PartType, text: str) -> bool:
    contacts = _lookup(db, id_type, text)
    if not contacts:
        return False
    if len(contacts) > 1:
        raise PartsConflict([f"'{text}' is shared by {len(contacts)} contacts"])
    return delete_contact(db, contacts[0].key)


def create_part(db: Session, part: ItemPart) -> ItemBrief:
    """Create a contact by name, or attach one mechanism to an existing contact."""
    part_type = PartType.parse(part.part_type())
    if part_type is None:
        raise PartsConflict(["invalid part request"])

    if part_type is PartType.NAME:
        contact = Contact.named(part.name)
        messages = contact.validate()
        messages.extend(contact.check_parts(db))
        if messages:
            raise PartsConflict(messages)
        saved = contact.save_item(db)
        db.commit()
        logger.info("Created %s", saved.hash_description())
        return ItemBrief.of(saved)

    kind = Kind.parse(part.kind())
    if kind is None:
        raise PartsConflict([f"'{part.kind()}' is not a kind of contact mechanism"])
    if kind not in ALLOWED_KINDS[part_type]:
        raise PartsConflict([f"{kind.value} {MECHANISM_TYPES[part_type].noun} not supported"])
    if not part.value():
        raise PartsConflict([f"a {part_type.value} value is required"])

    contact = Contact.find(db, part.name)
    if contact is None:
        raise _gone()

    messages: list[str] = []
    contact.merge(part_type, kind, part.value(), messages)
    messages.extend(contact.check_parts(db))
    if messages:
        raise PartsConflict(messages)

    saved = contact.save_item(db)
    db.commit()
    attached = saved.slots(part_type)[kind]
    logger.info("Attached %s to %s", attached.format_fully(kind.value), saved.description())
    return ItemBrief.of(attached)
