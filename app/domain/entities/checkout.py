from __future__ import annotations

from dataclasses import dataclass


PAYMENT_METHOD_CARD = "card"
CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


@dataclass(frozen=True)
class CheckoutLineItem:
    name: str
    quantity: int
    amount: int
    currency: str


E_BOOK_ADD_ON = CheckoutLineItem(
    name="Pasha e-book",
    quantity=1,
    amount=300,
    currency="usd",
)


def success_url(domain: str) -> str:
    # Stripe substitutes the placeholder with the real session id on redirect.
    return domain + "/success.html?session_id={CHECKOUT_SESSION_ID}"


def cancel_url(domain: str) -> str:
    return domain + "/cancel.html"
