from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from app.models.checkout import CheckoutRequest, CheckoutResponse, CheckoutErrorResponse
from app.services.orders import place_order
from app.database.sanity_store import OrderStore, get_order_store
from config_flows.checkout_flow import MESSAGES
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/ping")
async def ping(store: OrderStore = Depends(get_order_store)):
    return {"status": "ok", "store": store.name}

@router.post(
    "/api/checkout",
    response_model=CheckoutResponse,
    responses={500: {"model": CheckoutErrorResponse}},
)
async def checkout(request: Request, store: OrderStore = Depends(get_order_store)):
    # Body is parsed here rather than by FastAPI so malformed input gets the same 500 shape
    try:
        logger.info("[Checkout] Received checkout request")
        payload = await request.json()
        checkout_request = CheckoutRequest.model_validate(payload)

        order_id = await place_order(checkout_request, store)

        return CheckoutResponse(message=MESSAGES["success"], orderId=order_id)

    except Exception as e:
        logger.error(f"[Checkout] Error processing order: {str(e)}")
        error = CheckoutErrorResponse(error=MESSAGES["failure"], details=str(e))
        return JSONResponse(status_code=500, content=error.model_dump())
