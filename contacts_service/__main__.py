from __future__ import annotations

import argparse

import uvicorn

from contacts_service.core.config import PROFILES, get_settings
from contacts_service.core.logging import setup_logging
from contacts_service.main import create_app


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="contacts_service", description="Run the contacts service")
    parser.add_argument("profile", nargs="?", choices=PROFILES, default=settings.profile)
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    settings = settings.model_copy(update={"profile": args.profile, "host": args.host, "port": args.port})
    setup_logging(settings.log_level, settings.log_format, service=settings.app_name)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
