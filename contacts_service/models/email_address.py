from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from contacts_service.db.base import Base, KeyType


class EmailAddressTable(Base):
    __tablename__ = "email_address"

    id: Mapped[int] = mapped_column(KeyType, primary_key=True, autoincrement=True)

    account: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    host_name: Mapped[str] = mapped_column("hostname", String(30), nullable=False, default="")

    hash_key: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
