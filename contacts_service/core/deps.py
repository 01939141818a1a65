from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from contacts_service.core.config import Settings, get_settings
from contacts_service.core.security import token_client
from contacts_service.db.session import SessionLocal

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def require_token(
    settings: Settings = Depends(get_app_settings),
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    """Check the bearer token when tokens are required; returns the client name."""
    if not settings.token_required:
        return None
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    try:
        return token_client(token, settings)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


async def read_json_body(request: Request) -> Any:
    """The request body as parsed JSON, or None when absent or malformed."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None
