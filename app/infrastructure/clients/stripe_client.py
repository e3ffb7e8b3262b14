from __future__ import annotations

import logging
from typing import Any

import stripe
from pydantic import BaseModel, Field, ValidationError

from app.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeCheckoutSessionParams,
    StripeCustomer,
    StripeWebhookEvent,
)
from app.application.ports.stripe_port import StripePort
from app.domain.entities.checkout import CHECKOUT_SESSION_COMPLETED
from app.domain.exceptions import BillingError, WebhookSignatureError


logger = logging.getLogger(__name__)


class _EventData(BaseModel):
    object: dict[str, Any] = Field(default_factory=dict)


class _EventEnvelope(BaseModel):
    type: str = ""
    data: _EventData = Field(default_factory=_EventData)


class _DisplayItemCustom(BaseModel):
    name: str | None = None


class _DisplayItem(BaseModel):
    custom: _DisplayItemCustom | None = None


class _CustomerReference(BaseModel):
    customer: str | None = None


class StripeClient(StripePort):
    """Adapter over the ``stripe`` SDK.

    The secret key is passed on every request instead of being assigned to
    ``stripe.api_key``, so two clients with different keys can coexist.
    """

    def __init__(self, *, secret_key: str, webhook_secret: str):
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret

    def create_checkout_session(self, *, params: StripeCheckoutSessionParams) -> str:
        payload: dict = {
            "payment_method_types": list(params.payment_method_types),
            "subscription_data": {"items": [{"plan": params.subscription_plan_id}]},
            "success_url": params.success_url,
            "cancel_url": params.cancel_url,
        }
        if params.line_items:
            payload["line_items"] = [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "amount": item.amount,
                    "currency": item.currency,
                }
                for item in params.line_items
            ]

        try:
            session = stripe.checkout.Session.create(api_key=self._secret_key, **payload)
        except stripe.StripeError as exc:
            raise BillingError(str(exc)) from exc

        session_id = getattr(session, "id", None)
        if not session_id:
            raise BillingError("Stripe checkout session id is missing.")
        return str(session_id)

    def get_checkout_session(self, *, session_id: str) -> dict[str, Any]:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self._secret_key)
        except stripe.StripeError as exc:
            raise BillingError(str(exc)) from exc
        return _to_plain_dict(session)

    def get_customer(self, *, customer_id: str) -> StripeCustomer:
        try:
            customer = stripe.Customer.retrieve(customer_id, api_key=self._secret_key)
        except stripe.StripeError as exc:
            raise BillingError(str(exc)) from exc
        return StripeCustomer(
            id=str(getattr(customer, "id", customer_id)),
            email=getattr(customer, "email", None),
        )

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        try:
            stripe.Webhook.construct_event(
                payload=payload,
                sig_header=signature,
                secret=self._webhook_secret,
            )
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise WebhookSignatureError(str(exc)) from exc

        try:
            envelope = _EventEnvelope.model_validate_json(payload)
        except ValidationError as exc:
            raise WebhookSignatureError("Malformed Stripe event payload.") from exc

        if envelope.type != CHECKOUT_SESSION_COMPLETED:
            return StripeWebhookEvent(event_type=envelope.type, checkout_completed=None)

        return StripeWebhookEvent(
            event_type=envelope.type,
            checkout_completed=_checkout_completed_data(envelope.data.object),
        )


def _checkout_completed_data(data_object: dict[str, Any]) -> StripeCheckoutCompletedEventData:
    # Each field is decoded on its own so a malformed display item never hides the customer.
    return StripeCheckoutCompletedEventData(
        customer_id=_customer_id(data_object),
        first_display_item_name=_first_display_item_name(data_object),
    )


def _customer_id(data_object: dict[str, Any]) -> str | None:
    try:
        return _CustomerReference.model_validate(data_object).customer
    except ValidationError:
        logger.warning("stripe_client: checkout session customer has unexpected shape")
        return None


def _first_display_item_name(data_object: dict[str, Any]) -> str | None:
    items = data_object.get("display_items")
    if not isinstance(items, list) or not items:
        return None
    try:
        item = _DisplayItem.model_validate(items[0])
    except ValidationError:
        logger.warning("stripe_client: first display item has unexpected shape")
        return None
    if item.custom is None:
        return None
    return item.custom.name


def _to_plain_dict(obj: Any) -> dict[str, Any]:
    to_dict_recursive = getattr(obj, "to_dict_recursive", None)
    if callable(to_dict_recursive):
        return to_dict_recursive()
    return obj.to_dict()
