from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class BillingError(DomainError):
    """Falha ao falar com o provedor de pagamento."""


class CheckoutSessionInputError(DomainError):
    """Parametros invalidos para consulta de checkout session."""


class WebhookSignatureError(BillingError):
    """Payload de webhook nao passou na verificacao de assinatura."""
