from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from evercart.schemas.product import ProductOut
from evercart.crud import product as crud_product
from evercart.db.deps import get_db

router = APIRouter()

@router.get("/products", response_model=List[ProductOut])
def list_products_route(
    search: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    rating: Optional[float] = None,
    price: Optional[float] = None,
    availability: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Browse the catalog.

    ``rating`` is a minimum rating, ``price`` a maximum price and
    ``availability=true`` hides unavailable products.
    """
    return crud_product.list_products(
        db,
        search=search,
        category=category,
        brand=brand,
        min_rating=rating,
        max_price=price,
        available_only=availability == "true",
    )

@router.get("/products/{product_id}", response_model=ProductOut)
def get_product_by_id_route(product_id: int, db: Session = Depends(get_db)):
    product = crud_product.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return crud_product.distinct_categories(db)

@router.get("/brands", response_model=List[str])
def list_brands(db: Session = Depends(get_db)):
    return crud_product.distinct_brands(db)
