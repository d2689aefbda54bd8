"""Checkout form behaviour for the storefront client.

Holds the buyer's billing fields, reads the cart it was given, and posts a
single order to the checkout endpoint. Rendering is left to the caller;
``summary_lines`` gives the text a page would show.
"""
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from app.models.checkout import PaymentMethod, SubmissionResult
from app.state.store import CartState
from config import settings
from config_flows.checkout_flow import (
    MESSAGES,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    initial_form_data,
)

logger = logging.getLogger(__name__)

# Same rule a browser applies to <input type="email">
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.match(value) is not None

def format_price(price: float) -> str:
    """Price without trailing zeros, e.g. 10 or 10.5"""
    return f"{price:.2f}".rstrip("0").rstrip(".")

class CheckoutForm:
    def __init__(
        self,
        cart: CartState,
        endpoint: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.cart = cart
        self.endpoint = endpoint or settings.CHECKOUT_API_URL
        self.client = client
        self.form_data: Dict[str, str] = initial_form_data()
        self.message = ""
        self.loading = False

    @property
    def total_price(self) -> float:
        return self.cart.total_price()

    @property
    def submit_label(self) -> str:
        return MESSAGES["client_busy"] if self.loading else "Place Order"

    def update_field(self, name: str, value: str):
        """Apply one edit to a billing field"""
        if name not in self.form_data:
            raise KeyError(f"Unknown checkout field: {name}")
        if name == "paymentMethod":
            # raises ValueError for anything outside the enumeration
            value = PaymentMethod(value).value
        self.form_data[name] = value

    def reset(self):
        self.form_data = initial_form_data()

    def missing_required_fields(self) -> List[str]:
        return [field for field in REQUIRED_FIELDS if not self.form_data[field].strip()]

    def summary_lines(self) -> List[str]:
        lines = []
        for item in self.cart.items:
            lines.append(
                f"{item.title} | Quantity: {item.quantity} | Price: ${format_price(item.price)}"
                f" | Total: ${item.line_total:.2f}"
            )
        lines.append(f"Total Price: ${self.total_price:.2f}")
        return lines

    def build_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.form_data)
        for field in OPTIONAL_FIELDS:
            if not payload[field]:
                payload[field] = None
        payload["cart"] = [
            item.model_dump(by_alias=True, exclude_none=True) for item in self.cart.items
        ]
        payload["totalPrice"] = self.total_price
        return payload

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        # per request, so injected clients wait as long as the default one
        timeout = settings.CHECKOUT_TIMEOUT
        if self.client is not None:
            return await self.client.post(self.endpoint, json=payload, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(self.endpoint, json=payload)

    async def submit(self) -> SubmissionResult:
        """Send the order once; see ``SubmissionResult`` for the outcome."""
        if self.loading:
            logger.info("[Form] Submission already in flight, ignoring")
            return SubmissionResult(ok=False, message=MESSAGES["client_busy"])

        missing = self.missing_required_fields()
        if missing:
            self.message = MESSAGES["client_missing_fields"].format(fields=", ".join(missing))
            return SubmissionResult(ok=False, message=self.message)

        if not is_valid_email(self.form_data["email"]):
            self.message = MESSAGES["client_invalid_email"]
            return SubmissionResult(ok=False, message=self.message)

        self.loading = True
        self.message = ""
        try:
            response = await self._post(self.build_payload())
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[Form] Checkout error: {e!r}")
            self.message = MESSAGES["client_transport_error"]
            return SubmissionResult(ok=False, message=self.message)
        finally:
            self.loading = False

        if not isinstance(data, dict):
            data = {}

        if response.is_success:
            order_id = data.get("orderId")
            self.message = MESSAGES["client_success"].format(order_id=order_id)
            self.reset()
            self.cart.clear()
            logger.info(f"[Form] Order placed: {order_id}")
            return SubmissionResult(ok=True, message=self.message, order_id=order_id)

        error = data.get("error") or f"HTTP {response.status_code}"
        self.message = MESSAGES["client_error"].format(error=error)
        logger.warning(f"[Form] Order rejected: {error}")
        return SubmissionResult(ok=False, message=self.message)
