from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from contacts_service.core.config import Settings, get_settings

# every token the service issues carries this scope
TOKEN_SCOPE = "contacts"


def create_access_token(client: str, extra_claims: Optional[Dict[str, Any]] = None, settings: Optional[Settings] = None) -> str:
    """Issue a signed token naming the calling client.

    Tokens identify a client program, not a person; there is no login.
    """
    settings = settings or get_settings()
    issued = datetime.now(timezone.utc)

    claims: Dict[str, Any] = {"sub": client, "scope": TOKEN_SCOPE}
    if extra_claims:
        claims.update(extra_claims)
    claims["iat"] = int(issued.timestamp())
    claims["exp"] = int((issued + timedelta(minutes=settings.access_token_exp_minutes)).timestamp())

    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def token_client(token: str, settings: Optional[Settings] = None) -> str:
    """The client named by a valid contacts token; raises JWTError otherwise."""
    claims = decode_access_token(token, settings)
    client = claims.get("sub")
    if not client or claims.get("scope") != TOKEN_SCOPE:
        raise JWTError("token does not grant contacts access")
    return client
