"""Translation between wire bodies and domain contacts.

Decoding never raises on bad content: problems are appended to the caller's
message list and the offending mechanism is left out.
"""

from __future__ import annotations

from contacts_service.domain.contact import Contact, ContactMechanism, Mechanism
from contacts_service.domain.email import EmailAddress
from contacts_service.domain.kinds import ALLOWED_KINDS, Kind, PartType
from contacts_service.domain.mail import MailAddress
from contacts_service.domain.phone import PhoneNumber
from contacts_service.schemas.contact import ContactBody, ContactMechanismBody, MechanismBody


def encode_mechanism(kind: Kind, item: Mechanism) -> ContactMechanismBody:
    if item.part_type is PartType.MAIL:
        body = MechanismBody(
            key=item.key,
            street=item.street,
            office=item.office,
            city=item.city,
            state=item.state_code,
            zip=item.postal_code,
        )
    else:
        body = MechanismBody(key=item.key, value=item.value)
    return ContactMechanismBody(type=kind.value, mechanism=body)


def encode_contact(contact: Contact) -> ContactBody:
    return ContactBody(
        key=contact.key,
        name=contact.name,
        mechanisms=[encode_mechanism(m.kind, m.mechanism) for m in contact.mechanisms],
    )


def mechanism_type(body: MechanismBody) -> PartType:
    if body.is_mail():
        return PartType.MAIL
    if body.value and "@" in body.value:
        return PartType.EMAIL
    return PartType.PHONE


def decode_mechanism(body: ContactMechanismBody, messages: list[str]) -> ContactMechanism | None:
    kind = Kind.parse(body.type)
    if kind is None:
        messages.append(f"'{body.type}' is not a kind of contact mechanism")
        return None

    part_type = mechanism_type(body.mechanism)
    item: Mechanism
    if part_type is PartType.MAIL:
        m = body.mechanism
        item = MailAddress(m.street or "", m.office or "", m.city or "", m.state or "", m.zip or "")
        notes = item.problems()
    elif part_type is PartType.EMAIL:
        notes = EmailAddress.validate(body.mechanism.value)
        item = None if notes else EmailAddress.from_text(body.mechanism.value)
    else:
        notes = PhoneNumber.validate(body.mechanism.value)
        item = None if notes else PhoneNumber.from_text(body.mechanism.value)

    if notes:
        messages.append(f"{kind.value} {notes[0]}")
        return None
    if kind not in ALLOWED_KINDS[part_type]:
        messages.append(f"{kind.value} {item.noun} not supported")
        return None

    item.key = body.mechanism.key
    return ContactMechanism(kind, item)


def decode_contact(body: ContactBody, messages: list[str]) -> Contact:
    contact = Contact(body.name)
    contact.key = body.key
    for m in body.mechanisms:
        mechanism = decode_mechanism(m, messages)
        if mechanism is not None:
            contact.adopt([mechanism])
    return contact
