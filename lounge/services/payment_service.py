from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import settings
from ..errors import UpstreamServiceError

logger = logging.getLogger(__name__)


class PaymentGatewayError(UpstreamServiceError):
    """Stripe rejected the call or is not configured."""


class PaymentGateway:
    """Thin wrapper over Stripe payment intents."""

    def __init__(self, secret_key: Optional[str] = None, stripe_sdk: Any | None = None) -> None:
        if stripe_sdk is None:
            import stripe as stripe_sdk

        self.stripe = stripe_sdk
        self.secret_key = secret_key or settings.stripe_secret_key

    def _require_key(self) -> str:
        if not self.secret_key:
            logger.error("Stripe secret key not configured (STRIPE_SECRET_KEY)")
            raise PaymentGatewayError("Payment service is not configured. Please try again later.")
        return self.secret_key

    def create_payment_intent(self, amount_minor: int, currency: Optional[str] = None,
                              metadata: Optional[Dict[str, str]] = None) -> Any:
        api_key = self._require_key()
        try:
            return self.stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency or settings.currency,
                metadata=metadata or {},
                api_key=api_key,
            )
        except self.stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {e}")
            raise PaymentGatewayError("Unable to start payment at this time. Please try again later.") from e

    def retrieve_payment_intent(self, payment_intent_id: str) -> Any:
        api_key = self._require_key()
        try:
            return self.stripe.PaymentIntent.retrieve(payment_intent_id, api_key=api_key)
        except self.stripe.StripeError as e:
            logger.error(f"Stripe payment intent lookup failed for {payment_intent_id}: {e}")
            raise PaymentGatewayError("Unable to verify payment at this time. Please try again later.") from e
