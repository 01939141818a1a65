"""Process-wide map from entity type to its storage gateway.

The registry is populated once at startup by ``configure_storage`` and frozen
afterwards. Gateways are cheap per-session adapters, so lookups hand back a
fresh gateway bound to the caller's session.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from contacts_service.core.errors import RegistryFrozenError, StorageNotConfiguredError

logger = logging.getLogger(__name__)


class StorageRegistry:
    def __init__(self) -> None:
        self._gateways: dict[type, type] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._gateways)

    def __contains__(self, item_type: type) -> bool:
        return item_type in self._gateways

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, item_type: type, gateway_type: type) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"cannot register {item_type.__name__} storage after startup")
        self._gateways[item_type] = gateway_type

    def freeze(self) -> None:
        self._frozen = True

    def storage(self, db: Session, item_type: type) -> Any:
        gateway_type = self._gateways.get(item_type)
        if gateway_type is None:
            raise StorageNotConfiguredError(f"no storage configured for {item_type.__name__}")
        return gateway_type(db)


registry = StorageRegistry()


def configure_storage() -> StorageRegistry:
    """Register one gateway per entity type and freeze the registry.

    Safe to call more than once; later calls are no-ops.
    """
    if registry.frozen:
        return registry

    from contacts_service.domain.contact import Contact
    from contacts_service.domain.email import EmailAddress
    from contacts_service.domain.mail import MailAddress
    from contacts_service.domain.phone import PhoneNumber
    from contacts_service.storage.addresses import AddressStorage
    from contacts_service.storage.contacts import ContactStorage
    from contacts_service.storage.emails import EmailStorage
    from contacts_service.storage.phones import PhoneStorage

    registry.register(PhoneNumber, PhoneStorage)
    registry.register(EmailAddress, EmailStorage)
    registry.register(MailAddress, AddressStorage)
    registry.register(Contact, ContactStorage)
    registry.freeze()

    logger.info("Storage registry configured with %d gateways", len(registry))
    return registry
