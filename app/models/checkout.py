from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"
    CASH_ON_DELIVERY = "cash-on-delivery"

class CartItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)
    image: Optional[str] = None  # display only

    @property
    def line_total(self) -> float:
        return self.quantity * self.price

class CheckoutFormData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    phone: str
    company: Optional[str] = None
    address: str
    city: str
    state: str
    zip: str
    country: str
    order_notes: Optional[str] = Field(default=None, alias="orderNotes")
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.CASH_ON_DELIVERY, alias="paymentMethod"
    )

class CheckoutRequest(CheckoutFormData):
    cart: List[CartItem]
    total_price: float = Field(alias="totalPrice")

class CheckoutResponse(BaseModel):
    message: str
    orderId: str

class CheckoutErrorResponse(BaseModel):
    error: str
    details: str

class SubmissionResult(BaseModel):
    ok: bool
    message: str
    order_id: Optional[str] = None
