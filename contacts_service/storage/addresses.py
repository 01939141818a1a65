from __future__ import annotations

from contacts_service.domain.mail import MailAddress
from contacts_service.models.mail_address import MailAddressTable
from contacts_service.storage.base import HashedStorage


class AddressStorage(HashedStorage[MailAddress]):
    table = MailAddressTable

    @staticmethod
    def to_item(row: MailAddressTable) -> MailAddress:
        item = MailAddress(row.street or "", row.office or "", row.city, row.state_code, row.postal_code)
        item.key = row.id
        item.hash_key = row.hash_key
        return item

    def fill_row(self, row: MailAddressTable, item: MailAddress) -> None:
        row.street = item.street
        row.office = item.office
        row.city = item.city
        row.state_code = item.state_code
        row.postal_code = item.postal_code
        row.hash_key = item.hash_key

    def order_by(self) -> tuple:
        return (MailAddressTable.state_code, MailAddressTable.city, MailAddressTable.street)
