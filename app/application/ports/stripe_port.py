from __future__ import annotations

from typing import Any, Protocol

from app.application.dto.billing import (
    StripeCheckoutSessionParams,
    StripeCustomer,
    StripeWebhookEvent,
)


class StripePort(Protocol):
    def create_checkout_session(self, *, params: StripeCheckoutSessionParams) -> str:
        ...

    def get_checkout_session(self, *, session_id: str) -> dict[str, Any]:
        ...

    def get_customer(self, *, customer_id: str) -> StripeCustomer:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...
