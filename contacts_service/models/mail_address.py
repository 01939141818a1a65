from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from contacts_service.db.base import Base, KeyType


class MailAddressTable(Base):
    __tablename__ = "mail_address"

    id: Mapped[int] = mapped_column(KeyType, primary_key=True, autoincrement=True)

    street: Mapped[str] = mapped_column(String(50), nullable=True, default="")
    office: Mapped[str] = mapped_column(String(50), nullable=True, default="")
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    state_code: Mapped[str] = mapped_column(String(2), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(15), nullable=False)

    hash_key: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
