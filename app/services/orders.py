import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from app.database.sanity_store import OrderStore
from app.models.checkout import CartItem, CheckoutRequest
from app.state.store import compute_total
from config_flows.checkout_flow import ORDER_CONFIG

logger = logging.getLogger(__name__)

# Totals within this distance are treated as equal
TOTAL_TOLERANCE = 0.005

def _new_key() -> str:
    return str(uuid4())

def build_order_items(
    cart: Iterable[CartItem], key_factory: Callable[[], str] = _new_key
) -> List[Dict[str, Any]]:
    """Map cart lines to order line items, each with its own _key."""
    return [
        {
            "_key": key_factory(),
            "_type": ORDER_CONFIG["item_type"],
            "product": {"_type": "reference", "_ref": item.id},
            "quantity": item.quantity,
            "price": item.price,
        }
        for item in cart
    ]

def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix"""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def build_order_document(
    request: CheckoutRequest,
    now: Optional[datetime] = None,
    key_factory: Callable[[], str] = _new_key,
) -> Dict[str, Any]:
    """Build the order document for a checkout request.

    Buyer fields are copied as submitted. The total is taken from the
    request as-is; the client computed it from the same cart.
    """
    now = now or datetime.now(timezone.utc)
    return {
        "_type": ORDER_CONFIG["document_type"],
        "name": request.name,
        "email": request.email,
        "phone": request.phone,
        "company": request.company,
        "address": request.address,
        "city": request.city,
        "state": request.state,
        "zip": request.zip,
        "country": request.country,
        "orderNotes": request.order_notes,
        "paymentMethod": request.payment_method.value,
        "items": build_order_items(request.cart, key_factory),
        "totalPrice": request.total_price,
        "status": ORDER_CONFIG["initial_status"],
        "createdAt": format_timestamp(now),
    }

async def place_order(request: CheckoutRequest, store: OrderStore) -> str:
    """Persist one order for the request and return the new order id"""
    logger.info(f"[Checkout] Placing order for {request.email} with {len(request.cart)} item(s)")

    expected = compute_total(request.cart)
    if abs(expected - request.total_price) > TOTAL_TOLERANCE:
        logger.warning(
            f"[Checkout] Submitted total {request.total_price} differs from cart total {expected}"
        )

    document = build_order_document(request)
    order_id = await store.create_order(document)

    logger.info(f"[Checkout] Order created: {order_id}")
    return order_id
