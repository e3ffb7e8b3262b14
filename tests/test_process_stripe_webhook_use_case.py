from __future__ import annotations

import logging

import pytest

from app.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeCustomer,
    StripeWebhookEvent,
    StripeWebhookInput,
)
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.exceptions import BillingError, WebhookSignatureError


BOUGHT = "bought an e-book! Send the e-book to alice@example.com"
DID_NOT_BUY = "Customer is subscribed but did not buy an e-book."


class FakeStripePort:
    def __init__(
        self,
        *,
        event: StripeWebhookEvent | None = None,
        verify_error: Exception | None = None,
        customer_error: Exception | None = None,
    ):
        self._event = event
        self._verify_error = verify_error
        self._customer_error = customer_error
        self.customer_lookups: list[str] = []

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        if self._verify_error is not None:
            raise self._verify_error
        return self._event

    def get_customer(self, *, customer_id: str) -> StripeCustomer:
        self.customer_lookups.append(customer_id)
        if self._customer_error is not None:
            raise self._customer_error
        return StripeCustomer(id=customer_id, email="alice@example.com")


def _completed(item_name: str | None, customer_id: str | None = "cus_1") -> StripeWebhookEvent:
    return StripeWebhookEvent(
        event_type="checkout.session.completed",
        checkout_completed=StripeCheckoutCompletedEventData(
            customer_id=customer_id,
            first_display_item_name=item_name,
        ),
    )


def _command() -> StripeWebhookInput:
    return StripeWebhookInput(signature="t=1,v1=abc", payload=b"{}")


def test_invalid_signature_propagates_without_customer_lookup():
    port = FakeStripePort(verify_error=WebhookSignatureError("No signatures found"))
    use_case = ProcessStripeWebhookUseCase(stripe_port=port)

    with pytest.raises(WebhookSignatureError):
        use_case.execute(_command())

    assert port.customer_lookups == []


def test_other_event_types_are_ignored():
    port = FakeStripePort(
        event=StripeWebhookEvent(event_type="invoice.paid", checkout_completed=None)
    )

    output = ProcessStripeWebhookUseCase(stripe_port=port).execute(_command())

    assert output.event_type == "invoice.paid"
    assert output.handled is False
    assert port.customer_lookups == []


def test_e_book_purchase_logs_fulfillment_message(caplog):
    caplog.set_level(logging.INFO)
    port = FakeStripePort(event=_completed("Pasha e-book"))

    output = ProcessStripeWebhookUseCase(stripe_port=port).execute(_command())

    assert output.handled is True
    assert output.bought_add_on is True
    assert port.customer_lookups == ["cus_1"]
    assert BOUGHT in caplog.text
    assert DID_NOT_BUY not in caplog.text


@pytest.mark.parametrize("item_name", [None, "", "Sticker pack", "pasha e-book"])
def test_anything_else_logs_did_not_buy(caplog, item_name):
    caplog.set_level(logging.INFO)
    port = FakeStripePort(event=_completed(item_name))

    output = ProcessStripeWebhookUseCase(stripe_port=port).execute(_command())

    assert output.handled is True
    assert output.bought_add_on is False
    assert DID_NOT_BUY in caplog.text
    assert BOUGHT not in caplog.text


def test_customer_lookup_failure_is_logged_and_acknowledged(caplog):
    caplog.set_level(logging.INFO)
    port = FakeStripePort(
        event=_completed("Pasha e-book"),
        customer_error=BillingError("No such customer: 'cus_1'"),
    )

    output = ProcessStripeWebhookUseCase(stripe_port=port).execute(_command())

    assert output.handled is False
    assert port.customer_lookups == ["cus_1"]
    assert "customer lookup failed" in caplog.text
    assert BOUGHT not in caplog.text
    assert DID_NOT_BUY not in caplog.text


def test_missing_customer_reference_skips_lookup():
    port = FakeStripePort(event=_completed("Pasha e-book", customer_id=None))

    output = ProcessStripeWebhookUseCase(stripe_port=port).execute(_command())

    assert output.handled is False
    assert port.customer_lookups == []
