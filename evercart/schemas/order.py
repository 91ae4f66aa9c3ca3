from pydantic import EmailStr, Field
from typing import List, Optional
from datetime import datetime
from evercart.schemas.base import CamelModel
from evercart.models.order import OrderStatus, PaymentMethod

class DeliveryAddress(CamelModel):
    full_name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)

class OrderCreate(CamelModel):
    user_email: Optional[EmailStr] = None
    delivery_address: DeliveryAddress
    payment_method: PaymentMethod = PaymentMethod.cash_on_delivery

class OrderItemOut(CamelModel):
    product_id: int
    product_name: str
    product_image: str
    quantity: int
    price: float

class OrderOut(CamelModel):
    id: int
    user_email: str
    items: List[OrderItemOut]
    total_amount: float
    status: OrderStatus
    delivery_address: DeliveryAddress
    payment_method: PaymentMethod
    order_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class OrderStatusUpdate(CamelModel):
    email: Optional[EmailStr] = None  # claimed admin identity
    status: OrderStatus
