from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictBool


class CreateCheckoutSessionRequest(BaseModel):
    # null, like an absent flag, means no add-on.
    is_buying_sticker: StrictBool | None = Field(default=None, validation_alias="isBuyingSticker")


class CreateCheckoutSessionResponse(BaseModel):
    checkout_session_id: str = Field(serialization_alias="checkoutSessionId")


class CheckoutSessionResponse(BaseModel):
    checkout_session: dict[str, Any] = Field(serialization_alias="CheckoutSession")


class PublicKeyResponse(BaseModel):
    public_key: str = Field(serialization_alias="publicKey")


class ErrorResponse(BaseModel):
    error: str
