from __future__ import annotations

from contacts_service.domain.email import EmailAddress
from contacts_service.models.email_address import EmailAddressTable
from contacts_service.storage.base import HashedStorage


class EmailStorage(HashedStorage[EmailAddress]):
    table = EmailAddressTable

    @staticmethod
    def to_item(row: EmailAddressTable) -> EmailAddress:
        item = EmailAddress(row.account, row.host_name)
        item.key = row.id
        item.hash_key = row.hash_key
        return item

    def fill_row(self, row: EmailAddressTable, item: EmailAddress) -> None:
        row.account = item.account
        row.host_name = item.host_name
        row.hash_key = item.hash_key

    def order_by(self) -> tuple:
        return (EmailAddressTable.host_name, EmailAddressTable.account)
