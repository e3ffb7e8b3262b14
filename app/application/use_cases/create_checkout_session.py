from __future__ import annotations

from app.application.dto.billing import (
    CreateCheckoutSessionInput,
    CreateCheckoutSessionOutput,
    StripeCheckoutSessionParams,
)
from app.application.ports.stripe_port import StripePort
from app.domain.entities.checkout import (
    E_BOOK_ADD_ON,
    PAYMENT_METHOD_CARD,
    cancel_url,
    success_url,
)


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        stripe_port: StripePort,
        subscription_plan_id: str,
        domain: str,
    ):
        self._stripe_port = stripe_port
        self._subscription_plan_id = subscription_plan_id
        self._domain = domain

    def build_params(self, command: CreateCheckoutSessionInput) -> StripeCheckoutSessionParams:
        line_items = (E_BOOK_ADD_ON,) if command.includes_add_on else ()
        return StripeCheckoutSessionParams(
            payment_method_types=(PAYMENT_METHOD_CARD,),
            subscription_plan_id=self._subscription_plan_id,
            success_url=success_url(self._domain),
            cancel_url=cancel_url(self._domain),
            line_items=line_items,
        )

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        session_id = self._stripe_port.create_checkout_session(params=self.build_params(command))
        return CreateCheckoutSessionOutput(checkout_session_id=session_id)
