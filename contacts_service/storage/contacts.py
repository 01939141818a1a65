from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from contacts_service.domain.contact import Contact
from contacts_service.domain.kinds import Kind
from contacts_service.models.contact import ContactAddressTable, ContactEmailTable, ContactPhoneTable, ContactTable
from contacts_service.models.email_address import EmailAddressTable
from contacts_service.models.mail_address import MailAddressTable
from contacts_service.models.phone_number import PhoneNumberTable
from contacts_service.storage.addresses import AddressStorage
from contacts_service.storage.base import HashedStorage
from contacts_service.storage.emails import EmailStorage
from contacts_service.storage.phones import PhoneStorage

logger = logging.getLogger(__name__)


class ContactStorage(HashedStorage[Contact]):
    table = ContactTable

    @staticmethod
    def to_item(row: ContactTable) -> Contact:
        item = Contact(row.name)
        item.key = row.id
        item.hash_key = row.hash_key
        for kind, link in row.phones.items():
            item.phones[Kind(kind)] = PhoneStorage.to_item(link.phone)
        for kind, link in row.emails.items():
            item.emails[Kind(kind)] = EmailStorage.to_item(link.email)
        for kind, link in row.addresses.items():
            item.addresses[Kind(kind)] = AddressStorage.to_item(link.address)
        return item

    def fill_row(self, row: ContactTable, item: Contact) -> None:
        row.name = item.name
        row.hash_key = item.hash_key
        self._sync_links(row.phones, item.phones, ContactPhoneTable, "phone", PhoneNumberTable)
        self._sync_links(row.emails, item.emails, ContactEmailTable, "email", EmailAddressTable)
        self._sync_links(row.addresses, item.addresses, ContactAddressTable, "address", MailAddressTable)

    def _sync_links(self, links: dict, slots: dict, link_table: Any, attr: str, value_table: Any) -> None:
        # link rows are updated in place; a kind removed from the slots drops its link
        for kind in [k for k in links if Kind(k) not in slots]:
            del links[kind]
        for kind, value in slots.items():
            if not value.key:
                raise ValueError(f"{value.description()} must be saved before it is linked")
            value_row = self.db.get(value_table, value.key)
            link = links.get(kind.value)
            if link is None:
                links[kind.value] = link_table(kind=kind.value, **{attr: value_row})
            else:
                setattr(link, attr, value_row)

    def order_by(self) -> tuple:
        return (ContactTable.name,)

    def save(self, item: Contact) -> Contact:
        item.prepare_hash()
        row = self.db.get(ContactTable, item.key) if item.key else None
        if row is not None:
            self.fill_row(row, item)
            self.db.flush()
            logger.debug("Updated %s", item.hash_description())
            return self.to_item(row)

        row = ContactTable()
        try:
            with self.db.begin_nested():
                self.fill_row(row, item)
                self.db.add(row)
                self.db.flush()
        except IntegrityError:
            existing = self.find_by_hash(item.hash_key)
            if existing is None:
                raise
            logger.info("Insert of %s lost a race, using key %s", item.description(), existing.key)
            return existing
        return self.to_item(row)

    # ---- contact finders ----

    def _find(self, q: Any) -> list[Contact]:
        rows = self.db.execute(q.order_by(ContactTable.name)).scalars().all()
        return [self.to_item(r) for r in rows]

    def find_first(self) -> Optional[Contact]:
        row = self.db.execute(select(ContactTable).order_by(ContactTable.name).limit(1)).scalar_one_or_none()
        return None if row is None else self.to_item(row)

    def find_like(self, pattern: str) -> list[Contact]:
        return self._find(select(ContactTable).where(ContactTable.name.like(pattern)))

    def find_matching(self, pattern: str, *, city: Optional[str] = None, zip: Optional[str] = None) -> list[Contact]:
        q = select(ContactTable).where(ContactTable.name.like(pattern))
        if city or zip:
            owners = select(ContactAddressTable.contact_id).join(ContactAddressTable.address)
            if city:
                owners = owners.where(MailAddressTable.city.like(city))
            if zip:
                owners = owners.where(MailAddressTable.postal_code == zip)
            q = q.where(ContactTable.id.in_(owners))
        return self._find(q)

    def find_by_phone_hash(self, hash_key: int) -> list[Contact]:
        owners = (
            select(ContactPhoneTable.contact_id)
            .join(ContactPhoneTable.phone)
            .where(PhoneNumberTable.hash_key == hash_key)
        )
        return self._find(select(ContactTable).where(ContactTable.id.in_(owners)))

    def find_by_email_hash(self, hash_key: int) -> list[Contact]:
        owners = (
            select(ContactEmailTable.contact_id)
            .join(ContactEmailTable.email)
            .where(EmailAddressTable.hash_key == hash_key)
        )
        return self._find(select(ContactTable).where(ContactTable.id.in_(owners)))

    def find_by_address_hash(self, hash_key: int) -> list[Contact]:
        owners = (
            select(ContactAddressTable.contact_id)
            .join(ContactAddressTable.address)
            .where(MailAddressTable.hash_key == hash_key)
        )
        return self._find(select(ContactTable).where(ContactTable.id.in_(owners)))
