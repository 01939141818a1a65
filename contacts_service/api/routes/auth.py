from __future__ import annotations

from fastapi import APIRouter, Depends

from contacts_service.core.config import Settings
from contacts_service.core.deps import get_app_settings
from contacts_service.core.security import create_access_token
from contacts_service.schemas.auth import TokenRequest, TokenResponse

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
def issue_token(payload: TokenRequest, settings: Settings = Depends(get_app_settings)):
    token = create_access_token(payload.client, settings=settings)
    return TokenResponse(access_token=token)
