# evercart/api/routes_admin.py
# Admin panel: catalog, account and order management. Every route runs behind get_current_admin.

import logging
from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from evercart.crud import order as crud_order
from evercart.crud import product as crud_product
from evercart.crud import user as crud_user
from evercart.db.deps import ensure_claim_matches, get_current_admin, get_db
from evercart.models.order import OrderStatus
from evercart.models.user import User
from evercart.schemas.order import OrderOut, OrderStatusUpdate
from evercart.schemas.product import ProductCreate, ProductDeleted, ProductOut, ProductUpdate
from evercart.schemas.user import AdminUserUpdate, UserDeleted, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()

# ----------------------- Products -----------------------

@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product_route(
    data: ProductCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(data.email, admin)
    product = crud_product.create_product(db, data)
    logger.info("Admin %s created product %s", admin.email, product.id)
    return product

@router.put("/products/{product_id}", response_model=ProductOut)
def update_product_route(
    product_id: int,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(data.email, admin)
    product = crud_product.update_product(db, product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info("Admin %s updated product %s", admin.email, product_id)
    return product

@router.delete("/products/{product_id}", response_model=ProductDeleted)
def delete_product_route(
    product_id: int,
    email: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(email, admin)
    deleted = crud_product.delete_product(db, product_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info("Admin %s deleted product %s", admin.email, product_id)
    return deleted

# ----------------------- Users -----------------------

@router.get("/users", response_model=List[UserOut])
def list_users_route(
    email: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(email, admin)
    return crud_user.list_users(db)

@router.put("/users/{user_id}", response_model=UserOut)
def update_user_route(
    user_id: int,
    data: AdminUserUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(data.email, admin)
    try:
        user = crud_user.update_user(
            db, user_id, name=data.name, email=data.user_email, role=data.role
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.delete("/users/{user_id}", response_model=UserDeleted)
def delete_user_route(
    user_id: int,
    email: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(email, admin)
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own admin account")
    deleted = crud_user.delete_user(db, user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return deleted

# ----------------------- Orders -----------------------

@router.get("/orders", response_model=List[OrderOut])
def list_orders_route(
    status: Optional[OrderStatus] = None,
    email: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(email, admin)
    return crud_order.get_all_orders(db, status)

@router.put("/orders/{order_id}", response_model=OrderOut)
def update_order_status_route(
    order_id: int,
    status_data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    ensure_claim_matches(status_data.email, admin)
    order = crud_order.update_order_status(db, order_id, status_data.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
