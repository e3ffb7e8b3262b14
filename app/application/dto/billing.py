from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.entities.checkout import CheckoutLineItem


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    includes_add_on: bool


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    checkout_session_id: str


@dataclass(frozen=True)
class GetCheckoutSessionInput:
    session_id: str | None


@dataclass(frozen=True)
class GetCheckoutSessionOutput:
    checkout_session: dict[str, Any]


@dataclass(frozen=True)
class PublicKeyOutput:
    public_key: str


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
    bought_add_on: bool = False


@dataclass(frozen=True)
class StripeCheckoutSessionParams:
    payment_method_types: tuple[str, ...]
    subscription_plan_id: str
    success_url: str
    cancel_url: str
    line_items: tuple[CheckoutLineItem, ...] = ()


@dataclass(frozen=True)
class StripeCustomer:
    id: str
    email: str | None


@dataclass(frozen=True)
class StripeCheckoutCompletedEventData:
    customer_id: str | None
    first_display_item_name: str | None


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_type: str
    checkout_completed: StripeCheckoutCompletedEventData | None
