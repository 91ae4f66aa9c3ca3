from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from evercart.crud import cart as crud_cart
from evercart.db.deps import ensure_claim_matches, get_current_user, get_db
from evercart.models.user import User
from evercart.schemas.cart import (
    CartClear,
    CartClearOut,
    CartItemAdd,
    CartItemOut,
    CartItemRemove,
    CartItemUpdate,
    CartOut,
)
from evercart.schemas.product import ProductOut

router = APIRouter()

@router.get("", response_model=CartOut)
def get_cart_items(
    user_email: Optional[str] = Query(None, alias="userEmail"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    owner = ensure_claim_matches(user_email, user)
    lines = crud_cart.get_cart(db, owner)
    return CartOut(
        user_email=owner,
        items=[
            CartItemOut(
                product_id=item.product_id,
                quantity=item.quantity,
                product=ProductOut.model_validate(product) if product else None,
            )
            for item, product in lines
        ],
    )

@router.post("/add")
def add_item(data: CartItemAdd, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    owner = ensure_claim_matches(data.user_email, user)
    try:
        crud_cart.add_to_cart(db, owner, data.product_id, data.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Product added to cart successfully"}

@router.post("/update")
def update_item(data: CartItemUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    owner = ensure_claim_matches(data.user_email, user)
    try:
        crud_cart.update_cart_item(db, owner, data.product_id, data.quantity)
    except (crud_cart.CartNotFound, crud_cart.CartItemNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Cart updated successfully"}

@router.post("/remove")
def remove_item(data: CartItemRemove, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    owner = ensure_claim_matches(data.user_email, user)
    try:
        crud_cart.remove_from_cart(db, owner, data.product_id)
    except (crud_cart.CartNotFound, crud_cart.CartItemNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Product removed from cart successfully"}

@router.post("/clear", response_model=CartClearOut)
def clear_items(data: Optional[CartClear] = None, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    owner = ensure_claim_matches(data.user_email if data else None, user)
    previous_item_count = crud_cart.clear_cart(db, owner)
    return CartClearOut(
        message="Cart cleared successfully",
        previous_item_count=previous_item_count,
        new_item_count=0,
    )
