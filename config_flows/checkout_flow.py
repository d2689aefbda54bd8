from typing import Any, Dict, List

from app.models.checkout import PaymentMethod

# Billing fields shown on the checkout form, in display order
REQUIRED_FIELDS: List[str] = [
    "name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip",
    "country",
]
OPTIONAL_FIELDS: List[str] = ["company", "orderNotes"]

DEFAULT_PAYMENT_METHOD = PaymentMethod.CASH_ON_DELIVERY.value

# Order document settings
ORDER_CONFIG: Dict[str, Any] = {
    "document_type": "order",
    "item_type": "orderItem",
    "initial_status": "pending",
}

MESSAGES: Dict[str, str] = {
    "success": "Order placed successfully!",
    "failure": "Failed to process order",
    "client_success": "Order placed successfully! Order ID: {order_id}",
    "client_error": "Error placing order: {error}",
    "client_transport_error": "Error placing order. Please try again.",
    "client_missing_fields": "Please fill in the required fields: {fields}",
    "client_invalid_email": "Please enter a valid email address.",
    "client_busy": "Placing Order...",
}


def initial_form_data() -> Dict[str, str]:
    """Fresh form state with every field at its default."""
    data = {field: "" for field in REQUIRED_FIELDS + OPTIONAL_FIELDS}
    data["paymentMethod"] = DEFAULT_PAYMENT_METHOD
    return data
