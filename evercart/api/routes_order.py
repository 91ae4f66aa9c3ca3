import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional

from evercart.crud import order as crud_order
from evercart.db.deps import ensure_claim_matches, get_current_user, get_db
from evercart.models.user import User
from evercart.schemas.order import OrderCreate, OrderOut

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    owner = ensure_claim_matches(order_data.user_email, user)
    try:
        return crud_order.create_order_from_cart(
            db, owner, order_data.delivery_address, order_data.payment_method
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        # Rolled back as a whole, the cart still holds its lines
        db.rollback()
        logger.exception("Failed to create order for %s", owner)
        raise HTTPException(status_code=500, detail="Failed to create order")

@router.get("", response_model=List[OrderOut])
def list_my_orders(
    user_email: Optional[str] = Query(None, alias="userEmail"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    owner = ensure_claim_matches(user_email, user)
    return crud_order.get_orders_by_user(db, owner)

@router.get("/{order_id}", response_model=OrderOut)
def get_my_order(
    order_id: int,
    user_email: Optional[str] = Query(None, alias="userEmail"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    owner = ensure_claim_matches(user_email, user)
    order = crud_order.get_user_order(db, order_id, owner)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
