from __future__ import annotations

from contacts_service.domain.phone import PhoneNumber
from contacts_service.models.phone_number import PhoneNumberTable
from contacts_service.storage.base import HashedStorage


class PhoneStorage(HashedStorage[PhoneNumber]):
    table = PhoneNumberTable

    @staticmethod
    def to_item(row: PhoneNumberTable) -> PhoneNumber:
        item = PhoneNumber(row.area_code, row.prefix, row.suffix)
        item.key = row.id
        item.hash_key = row.hash_key
        return item

    def fill_row(self, row: PhoneNumberTable, item: PhoneNumber) -> None:
        row.area_code, row.prefix, row.suffix = item.parts()
        row.hash_key = item.hash_key

    def order_by(self) -> tuple:
        return (PhoneNumberTable.area_code, PhoneNumberTable.prefix, PhoneNumberTable.suffix)
