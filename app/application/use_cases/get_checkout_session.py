from __future__ import annotations

from app.application.dto.billing import GetCheckoutSessionInput, GetCheckoutSessionOutput
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import CheckoutSessionInputError


class GetCheckoutSessionUseCase:
    def __init__(self, *, stripe_port: StripePort):
        self._stripe_port = stripe_port

    def execute(self, command: GetCheckoutSessionInput) -> GetCheckoutSessionOutput:
        session_id = (command.session_id or "").strip()
        if not session_id:
            raise CheckoutSessionInputError("sessionId is required.")

        session = self._stripe_port.get_checkout_session(session_id=session_id)
        return GetCheckoutSessionOutput(checkout_session=session)
