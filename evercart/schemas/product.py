from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from evercart.schemas.base import CamelModel

# 👇 Base structure for a product (common fields)
class ProductBase(CamelModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    brand: str = Field(..., min_length=1)
    rating: float = Field(..., ge=0, le=5)
    availability: bool = True
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)

# 👇 What an admin sends to create a product
class ProductCreate(ProductBase):
    email: Optional[EmailStr] = None  # claimed admin identity, must match the token

# 👇 What the API returns when fetching products
class ProductOut(ProductBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# 👇 Partial update, only fields that were sent are applied
class ProductUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    brand: Optional[str] = Field(None, min_length=1)
    rating: Optional[float] = Field(None, ge=0, le=5)
    availability: Optional[bool] = None
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)

class ProductDeleted(CamelModel):
    id: int
    name: str
