from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from contacts_service.db.base import Base, KeyType


class PhoneNumberTable(Base):
    __tablename__ = "phone_number"

    id: Mapped[int] = mapped_column(KeyType, primary_key=True, autoincrement=True)

    area_code: Mapped[str] = mapped_column("phone_area", String(3), nullable=False, default="")
    prefix: Mapped[str] = mapped_column("phone_prefix", String(3), nullable=False, default="")
    suffix: Mapped[str] = mapped_column("phone_suffix", String(4), nullable=False, default="")

    hash_key: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
