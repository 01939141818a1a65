from __future__ import annotations

from fastapi import APIRouter, Depends

from contacts_service.api.routes import auth, contacts
from contacts_service.core.deps import require_token

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"], dependencies=[Depends(require_token)])
