from __future__ import annotations

from pydantic import BaseModel, Field


class TokenRequest(BaseModel):
    client: str = Field(min_length=1, max_length=100)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
