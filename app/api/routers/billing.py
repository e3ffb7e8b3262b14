from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool

from app.api.deps import (
    get_create_checkout_session_use_case,
    get_get_checkout_session_use_case,
    get_get_public_key_use_case,
    get_process_stripe_webhook_use_case,
)
from app.api.schemas.billing import (
    CheckoutSessionResponse,
    CreateCheckoutSessionRequest,
    CreateCheckoutSessionResponse,
    ErrorResponse,
    PublicKeyResponse,
)
from app.application.dto.billing import (
    CreateCheckoutSessionInput,
    GetCheckoutSessionInput,
    StripeWebhookInput,
)
from app.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from app.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from app.application.use_cases.get_public_key import GetPublicKeyUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.exceptions import BillingError, CheckoutSessionInputError, WebhookSignatureError


logger = logging.getLogger(__name__)

router = APIRouter()

BAD_REQUEST = "Bad Request"

# A JSON null body decodes to None and is treated like an empty object.
_create_request_adapter = TypeAdapter(CreateCheckoutSessionRequest | None)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(str(error["msg"]) for error in exc.errors())


@router.post(
    "/create-checkout-session",
    response_model=CreateCheckoutSessionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    request: Request,
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    body = await request.body()
    try:
        req = _create_request_adapter.validate_json(body)
    except ValidationError as exc:
        message = _validation_message(exc)
        logger.warning("create_checkout_session: invalid body error=%s", message)
        return _error(500, message)

    try:
        output = await run_in_threadpool(
            use_case.execute,
            CreateCheckoutSessionInput(includes_add_on=bool(req and req.is_buying_sticker)),
        )
    except BillingError as exc:
        logger.warning("create_checkout_session: stripe error=%s", exc)
        return _error(500, str(exc))

    return CreateCheckoutSessionResponse(checkout_session_id=output.checkout_session_id)


@router.get(
    "/checkout-session",
    response_model=CheckoutSessionResponse,
    responses={400: {"model": ErrorResponse}},
)
def get_checkout_session(
    request: Request,
    session_id: str | None = Query(default=None, alias="sessionId"),
    use_case: GetCheckoutSessionUseCase = Depends(get_get_checkout_session_use_case),
):
    try:
        output = use_case.execute(GetCheckoutSessionInput(session_id=session_id))
    except CheckoutSessionInputError:
        logger.warning("get_checkout_session: session id missing from url=%s", request.url)
        return _error(400, BAD_REQUEST)
    except BillingError as exc:
        logger.warning(
            "get_checkout_session: stripe lookup failed session_id=%r error=%s",
            session_id,
            exc,
        )
        return _error(400, BAD_REQUEST)

    return CheckoutSessionResponse(checkout_session=output.checkout_session)


@router.get("/public-key", response_model=PublicKeyResponse)
def get_public_key(use_case: GetPublicKeyUseCase = Depends(get_get_public_key_use_case)):
    output = use_case.execute()
    return PublicKeyResponse(public_key=output.public_key)


@router.post("/webhook", responses={400: {"model": ErrorResponse}})
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        await run_in_threadpool(
            use_case.execute,
            StripeWebhookInput(signature=stripe_signature, payload=payload),
        )
    except WebhookSignatureError as exc:
        logger.warning("stripe_webhook: verification failed error=%s", exc)
        return _error(400, str(exc))

    return Response(status_code=200)
