from __future__ import annotations

import argparse

from contacts_service.core.config import PROFILES, get_settings, redact_url, resolve_database_url
from contacts_service.db.base import Base
from contacts_service.db.session import create_db_engine

# Import models to register with SQLAlchemy
import contacts_service.models  # noqa: F401


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Create the contacts tables")
    parser.add_argument("profile", nargs="?", choices=PROFILES, default=settings.profile)
    args = parser.parse_args(argv)

    url = resolve_database_url(settings.model_copy(update={"profile": args.profile}))
    engine = create_db_engine(url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()

    print(f"DB initialized at {redact_url(url)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
