from __future__ import annotations

import logging

from app.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from app.application.ports.stripe_port import StripePort
from app.domain.entities.checkout import CHECKOUT_SESSION_COMPLETED, E_BOOK_ADD_ON
from app.domain.exceptions import BillingError


logger = logging.getLogger(__name__)


class ProcessStripeWebhookUseCase:
    """Interpret a verified Stripe event.

    Only ``checkout.session.completed`` is acted upon, and the only action is a
    log line telling whether the e-book add-on was part of the purchase. A
    failed customer lookup is logged and acknowledged so Stripe does not
    redeliver the event.
    """

    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        # WebhookSignatureError propagates; nothing below runs for unverified payloads.
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)

        if event.event_type != CHECKOUT_SESSION_COMPLETED or event.checkout_completed is None:
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        completed = event.checkout_completed
        if not completed.customer_id:
            logger.warning("stripe_webhook: checkout completed without customer reference")
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        try:
            customer = self._stripe_port.get_customer(customer_id=completed.customer_id)
        except BillingError as exc:
            # TODO: decide with the billing owners whether this should ask Stripe to redeliver.
            logger.warning(
                "stripe_webhook: customer lookup failed customer_id=%s error=%s",
                completed.customer_id,
                exc,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        if completed.first_display_item_name == E_BOOK_ADD_ON.name:
            logger.info(
                "🔔 Customer is subscribed and bought an e-book! Send the e-book to %s",
                customer.email,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=True, bought_add_on=True)

        logger.info("🔔 Customer is subscribed but did not buy an e-book.")
        return StripeWebhookOutput(event_type=event.event_type, handled=True)
