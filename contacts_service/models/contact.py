from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, attribute_keyed_dict, mapped_column, relationship

from contacts_service.db.base import Base, KeyType
from contacts_service.models.email_address import EmailAddressTable
from contacts_service.models.mail_address import MailAddressTable
from contacts_service.models.phone_number import PhoneNumberTable


class ContactTable(Base):
    __tablename__ = "contact"

    id: Mapped[int] = mapped_column(KeyType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    hash_key: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)

    # kind -> link row
    phones: Mapped[dict[str, "ContactPhoneTable"]] = relationship(
        "ContactPhoneTable",
        collection_class=attribute_keyed_dict("kind"),
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    emails: Mapped[dict[str, "ContactEmailTable"]] = relationship(
        "ContactEmailTable",
        collection_class=attribute_keyed_dict("kind"),
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    addresses: Mapped[dict[str, "ContactAddressTable"]] = relationship(
        "ContactAddressTable",
        collection_class=attribute_keyed_dict("kind"),
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class ContactPhoneTable(Base):
    __tablename__ = "contact_phones"

    contact_id: Mapped[int] = mapped_column(KeyType, ForeignKey("contact.id", ondelete="CASCADE"), primary_key=True)
    kind: Mapped[str] = mapped_column(String(10), primary_key=True)
    phone_id: Mapped[int] = mapped_column(KeyType, ForeignKey("phone_number.id"), nullable=False, index=True)

    phone: Mapped[PhoneNumberTable] = relationship(PhoneNumberTable, lazy="joined")


class ContactEmailTable(Base):
    __tablename__ = "contact_emails"

    contact_id: Mapped[int] = mapped_column(KeyType, ForeignKey("contact.id", ondelete="CASCADE"), primary_key=True)
    kind: Mapped[str] = mapped_column(String(10), primary_key=True)
    email_id: Mapped[int] = mapped_column(KeyType, ForeignKey("email_address.id"), nullable=False, index=True)

    email: Mapped[EmailAddressTable] = relationship(EmailAddressTable, lazy="joined")


class ContactAddressTable(Base):
    __tablename__ = "contact_addresses"

    contact_id: Mapped[int] = mapped_column(KeyType, ForeignKey("contact.id", ondelete="CASCADE"), primary_key=True)
    kind: Mapped[str] = mapped_column(String(10), primary_key=True)
    address_id: Mapped[int] = mapped_column(KeyType, ForeignKey("mail_address.id"), nullable=False, index=True)

    address: Mapped[MailAddressTable] = relationship(MailAddressTable, lazy="joined")
