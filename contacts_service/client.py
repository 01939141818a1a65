from __future__ import annotations

from typing import Any, Optional

import httpx

from contacts_service.core.errors import PartsConflict
from contacts_service.domain.contact import Contact
from contacts_service.domain.kinds import PartType
from contacts_service.schemas.contact import ContactBody, ItemBrief, ItemPart
from contacts_service.services.contact_codec import decode_contact, encode_contact

GONE = 410
CONFLICT = 409
ACCEPTED = 202


class ClientProxy:
    """HTTP client for the contacts service.

    Works over any ``httpx.Client``, including FastAPI's ``TestClient``.
    Contacts travel as domain objects; 409 responses surface as
    ``PartsConflict`` carrying the service's messages.
    """

    def __init__(self, http: httpx.Client, base_path: str = "/api"):
        self.http = http
        self.base_path = base_path.rstrip("/") + "/contacts"

    @classmethod
    def connect(cls, base_url: str = "http://localhost:9001", *, token: str = "", timeout: float = 10.0) -> "ClientProxy":
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return cls(httpx.Client(base_url=base_url, headers=headers, timeout=timeout))

    def close(self) -> None:
        self.http.close()

    def _url(self, path: str = "") -> str:
        return self.base_path + path

    @staticmethod
    def _raise_for_conflict(r: httpx.Response) -> None:
        if r.status_code == CONFLICT:
            body = r.json() if r.content else []
            raise PartsConflict(body if isinstance(body, list) else [str(body)])
        r.raise_for_status()

    @staticmethod
    def _contact(data: Any) -> Contact:
        return decode_contact(ContactBody.model_validate(data), [])

    def _contacts(self, r: httpx.Response) -> list[Contact]:
        self._raise_for_conflict(r)
        return [self._contact(c) for c in r.json()]

    def count_contacts(self) -> int:
        r = self.http.get(self._url("/count"))
        r.raise_for_status()
        return ItemBrief.model_validate(r.json()).key

    def find_first(self) -> Optional[Contact]:
        r = self.http.get(self._url("/first"))
        if r.status_code == GONE:
            return None
        r.raise_for_status()
        return self._contact(r.json())

    def get_contact(self, key: int) -> Optional[Contact]:
        r = self.http.get(self._url(f"/{key}"))
        if r.status_code == GONE:
            return None
        r.raise_for_status()
        return self._contact(r.json())

    def list_all_briefs(self, name: str = "") -> list[ItemBrief]:
        params = {"name": name} if name else {}
        r = self.http.get(self._url("/briefs"), params=params)
        r.raise_for_status()
        return [ItemBrief.model_validate(b) for b in r.json()]

    def list_contacts_like(self, name: str = "", city: str = "", zip: str = "") -> list[Contact]:
        params = {k: v for k, v in (("name", name), ("city", city), ("zip", zip)) if v}
        return self._contacts(self.http.get(self._url(), params=params))

    def _find_with_hash(self, id_type: PartType, text: str) -> list[Contact]:
        params = {"idType": id_type.value, "contactID": text}
        return self._contacts(self.http.get(self._url("/hash"), params=params))

    def find_by_name(self, name: str) -> list[Contact]:
        return self._find_with_hash(PartType.NAME, name)

    def find_by_phone(self, phone: str) -> list[Contact]:
        return self._find_with_hash(PartType.PHONE, phone)

    def find_by_email(self, email: str) -> list[Contact]:
        return self._find_with_hash(PartType.EMAIL, email)

    def find_by_address(self, address: str) -> list[Contact]:
        return self._find_with_hash(PartType.MAIL, address)

    def check_contact(self, contact: Contact) -> list[str]:
        r = self.http.post(self._url("/check"), json=encode_contact(contact).model_dump(exclude_none=True))
        if r.status_code == CONFLICT:
            return r.json()
        r.raise_for_status()
        return r.json()

    def create_contact(self, contact: Contact) -> ItemBrief:
        r = self.http.post(self._url(), json=encode_contact(contact).model_dump(exclude_none=True))
        self._raise_for_conflict(r)
        return ItemBrief.model_validate(r.json())

    def save_contact(self, contact: Contact) -> Optional[ItemBrief]:
        r = self.http.put(self._url(), json=encode_contact(contact).model_dump(exclude_none=True))
        if r.status_code == GONE:
            return None
        self._raise_for_conflict(r)
        return ItemBrief.model_validate(r.json())

    def save_part(self, part: ItemPart) -> Optional[ItemBrief]:
        r = self.http.post(self._url("/part"), json=part.model_dump())
        if r.status_code == GONE:
            return None
        self._raise_for_conflict(r)
        return ItemBrief.model_validate(r.json())

    def delete_contact(self, key: int) -> bool:
        r = self.http.delete(self._url(f"/{key}"))
        r.raise_for_status()
        return r.status_code != ACCEPTED
