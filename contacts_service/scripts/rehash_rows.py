"""Verify (and optionally repair) stored hash keys.

Every stored value must carry the hash of its canonical form. Run this after
any change to normalization or to the hash function; with ``--fix`` the
mismatched rows are rewritten in one transaction.
"""

from __future__ import annotations

import argparse

from sqlalchemy import select
from sqlalchemy.orm import Session

from contacts_service.core.config import PROFILES, get_settings, resolve_database_url
from contacts_service.db.session import bind_engine, create_db_engine, SessionLocal
from contacts_service.domain.contact import Contact
from contacts_service.domain.email import EmailAddress
from contacts_service.domain.mail import MailAddress
from contacts_service.domain.phone import PhoneNumber
from contacts_service.storage.registry import configure_storage, registry

import contacts_service.models  # noqa: F401

ENTITY_TYPES = (PhoneNumber, EmailAddress, MailAddress, Contact)


def find_mismatches(db: Session, item_type: type) -> list[tuple[int, int, int]]:
    """Return (key, stored hash, expected hash) for rows whose hash is stale."""
    store = registry.storage(db, item_type)
    results = []
    for row in db.execute(select(store.table)).scalars():
        item = store.to_item(row)
        item.hash_key = 0
        expected = item.digest()
        if expected != row.hash_key:
            results.append((row.id, row.hash_key, expected))
    return results


def rehash(db: Session, item_type: type, mismatches: list[tuple[int, int, int]]) -> None:
    store = registry.storage(db, item_type)
    for key, _stored, expected in mismatches:
        row = db.get(store.table, key)
        row.hash_key = expected
    db.flush()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Check stored hash keys against their canonical forms")
    parser.add_argument("profile", nargs="?", choices=PROFILES, default=settings.profile)
    parser.add_argument("--fix", action="store_true", help="rewrite mismatched hash keys")
    args = parser.parse_args(argv)

    engine = create_db_engine(resolve_database_url(settings.model_copy(update={"profile": args.profile})))
    bind_engine(engine)
    configure_storage()

    total = 0
    db = SessionLocal()
    try:
        for item_type in ENTITY_TYPES:
            mismatches = find_mismatches(db, item_type)
            total += len(mismatches)
            for key, stored, expected in mismatches:
                print(f"{item_type.__name__} key={key}: stored {stored}, expected {expected}")
            if args.fix and mismatches:
                rehash(db, item_type, mismatches)
        if args.fix:
            db.commit()
    finally:
        db.close()
        engine.dispose()

    print(f"{total} stale hash keys" + (" rewritten" if args.fix and total else ""))
    return 1 if total and not args.fix else 0


if __name__ == "__main__":
    raise SystemExit(main())
