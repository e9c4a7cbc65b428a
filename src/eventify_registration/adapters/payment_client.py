"""Payment provider client adapter."""

from dataclasses import dataclass

import httpx

from eventify_registration.domain.errors import PaymentGatewayError
from eventify_registration.domain.payment import CheckoutTicket, PaymentOrder
from eventify_registration.services.payment_handoff import (
    UNAVAILABLE_REASON,
    PaymentClient,
)


@dataclass
class HttpxPaymentClient(PaymentClient):
    """Payment client implemented with httpx."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, api_key: str) -> "HttpxPaymentClient":
        """Create a payment client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
        )

    async def begin_checkout(self, order: PaymentOrder) -> CheckoutTicket:
        """Open a checkout for the order with the payment provider."""
        payload: dict[str, object] = {
            "reference": order.reference,
            "event_id": order.event_id,
            "amount": str(order.amount),
            "currency": order.currency,
            "registrant": {
                "name": order.registrant.name,
                "email": order.registrant.email,
                "phone_number": order.registrant.phone_number,
                "team_size": order.registrant.team_size,
            },
        }
        try:
            response = await self.http_client.post(
                f"{self.base_url}/checkouts",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=10,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PaymentGatewayError(UNAVAILABLE_REASON) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise PaymentGatewayError("Payment service returned no checkout") from exc
        if not isinstance(data, dict):
            raise PaymentGatewayError("Payment service returned no checkout")
        checkout_id = data.get("id")
        if not checkout_id:
            raise PaymentGatewayError("Payment service returned no checkout")
        return CheckoutTicket(checkout_id=str(checkout_id), payment_url=data.get("url"))

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
