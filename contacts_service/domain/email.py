from __future__ import annotations

from contacts_service.domain.base import Hashed
from contacts_service.domain.kinds import PartType
from contacts_service.domain.normalize import validate_email

FORMAT = "account@host.com"
MESSAGE = "email addresses must have a format like " + FORMAT

# column widths of account and hostname
MAX_PART_LENGTH = 30


class EmailAddress(Hashed):
    """A (unique) email address, rendered as account@host."""

    noun = "email address"
    part_type = PartType.EMAIL

    def __init__(self, account: str = "", host_name: str = ""):
        super().__init__()
        self._account = account
        self._host_name = host_name

    @classmethod
    def from_text(cls, text: str) -> "EmailAddress":
        if EmailAddress.validate(text):
            raise ValueError(MESSAGE)
        account, host_name = text.split("@")
        return cls(account, host_name)

    @staticmethod
    def validate(text: str | None) -> list[str]:
        if not validate_email(text):
            return [MESSAGE]
        account, host_name = text.split("@")
        if len(account) > MAX_PART_LENGTH or len(host_name) > MAX_PART_LENGTH:
            return [MESSAGE]
        return []

    @property
    def account(self) -> str:
        return self._account

    @account.setter
    def account(self, value: str) -> None:
        self._account = value
        self.mark_dirty()

    @property
    def host_name(self) -> str:
        return self._host_name

    @host_name.setter
    def host_name(self, value: str) -> None:
        self._host_name = value
        self.mark_dirty()

    @property
    def value(self) -> str:
        return self.format_value()

    @value.setter
    def value(self, text: str) -> None:
        parsed = EmailAddress.from_text(text)
        self._account, self._host_name = parsed.account, parsed.host_name
        self.mark_dirty()

    def format_value(self) -> str:
        return f"{self._account}@{self._host_name}"
