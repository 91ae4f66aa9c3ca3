from pydantic import EmailStr
from typing import List, Optional
from evercart.schemas.base import CamelModel
from evercart.schemas.product import ProductOut

class CartItemAdd(CamelModel):
    user_email: Optional[EmailStr] = None
    product_id: int
    quantity: int = 1

class CartItemUpdate(CamelModel):
    user_email: Optional[EmailStr] = None
    product_id: int
    quantity: int

class CartItemRemove(CamelModel):
    user_email: Optional[EmailStr] = None
    product_id: int

class CartClear(CamelModel):
    user_email: Optional[EmailStr] = None

class CartItemOut(CamelModel):
    product_id: int
    quantity: int
    product: Optional[ProductOut] = None  # None when the product was deleted

class CartOut(CamelModel):
    user_email: str
    items: List[CartItemOut] = []

class CartClearOut(CamelModel):
    message: str
    previous_item_count: int
    new_item_count: int = 0
