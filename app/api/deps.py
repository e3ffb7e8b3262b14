from __future__ import annotations

from fastapi import Depends, Request

from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from app.application.use_cases.get_public_key import GetPublicKeyUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.infrastructure.clients.stripe_client import StripeClient
from app.shared.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_stripe_client(settings: Settings = Depends(get_settings)) -> StripeClient:
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


def get_create_checkout_session_use_case(
    settings: Settings = Depends(get_settings),
    stripe_client: StripeClient = Depends(get_stripe_client),
) -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        stripe_port=stripe_client,
        subscription_plan_id=settings.subscription_plan_id,
        domain=settings.domain,
    )


def get_get_checkout_session_use_case(
    stripe_client: StripeClient = Depends(get_stripe_client),
) -> GetCheckoutSessionUseCase:
    return GetCheckoutSessionUseCase(stripe_port=stripe_client)


def get_get_public_key_use_case(settings: Settings = Depends(get_settings)) -> GetPublicKeyUseCase:
    return GetPublicKeyUseCase(publishable_key=settings.stripe_publishable_key)


def get_process_stripe_webhook_use_case(
    stripe_client: StripeClient = Depends(get_stripe_client),
) -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(stripe_port=stripe_client)
