from __future__ import annotations

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

# 64-bit keys everywhere; SQLite only autoincrements an INTEGER PRIMARY KEY
KeyType = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Shared declarative base for every contacts table."""

    type_annotation_map = {
        int: BigInteger,
    }
