# Import all models so that SQLAlchemy registers them for metadata.create_all
from contacts_service.models.phone_number import PhoneNumberTable
from contacts_service.models.email_address import EmailAddressTable
from contacts_service.models.mail_address import MailAddressTable
from contacts_service.models.contact import ContactTable, ContactPhoneTable, ContactEmailTable, ContactAddressTable

__all__ = [
    "PhoneNumberTable",
    "EmailAddressTable",
    "MailAddressTable",
    "ContactTable",
    "ContactPhoneTable",
    "ContactEmailTable",
    "ContactAddressTable",
]
