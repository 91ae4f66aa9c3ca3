import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from sqlalchemy.orm import Session
from evercart.crud import cart as crud_cart
from evercart.models.order import Order, OrderItem, OrderStatus, PaymentMethod
from evercart.schemas.order import DeliveryAddress

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

def round_money(amount: Decimal) -> float:
    return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))

def create_order_from_cart(
    db: Session,
    user_email: str,
    delivery_address: DeliveryAddress,
    payment_method: PaymentMethod = PaymentMethod.cash_on_delivery,
) -> Order:
    """Turn the owner's cart into a pending order and empty the cart.

    Each line is copied with the product's current name, image and price.
    The order insert and the cart emptying share one commit, so either both
    are persisted or neither is.
    """
    cart = crud_cart.get_cart_by_email(db, user_email)
    if cart is None or not cart.items:
        raise ValueError("Cart is empty")

    lines = crud_cart.join_products(db, cart.items)
    missing = [item.product_id for item, product in lines if product is None]
    if missing:
        raise ValueError(
            "Some products in the cart are no longer available: "
            + ", ".join(str(product_id) for product_id in missing)
        )

    order = Order(
        user_email=user_email,
        status=OrderStatus.pending,
        payment_method=payment_method,
        **delivery_address.model_dump(),
    )

    total = Decimal("0")
    for item, product in lines:
        order.items.append(OrderItem(
            product_id=product.id,
            product_name=product.name,
            product_image=product.image,
            quantity=item.quantity,
            price=product.price,
        ))
        total += Decimal(str(product.price)) * item.quantity
    order.total_amount = round_money(total)

    db.add(order)
    cart.items.clear()
    db.commit()
    db.refresh(order)

    logger.info(
        "Order %s placed by %s: %d lines, total %.2f",
        order.id, user_email, len(order.items), order.total_amount,
    )
    return order

def get_orders_by_user(db: Session, user_email: str) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.user_email == user_email)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )

def get_user_order(db: Session, order_id: int, user_email: str) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id, Order.user_email == user_email).first()

def get_all_orders(db: Session, status: Optional[OrderStatus] = None) -> List[Order]:
    query = db.query(Order)
    if status is not None:
        query = query.filter(Order.status == status)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

def update_order_status(db: Session, order_id: int, new_status: OrderStatus) -> Optional[Order]:
    # Any status may follow any other
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        return None
    previous = order.status
    order.status = OrderStatus(new_status)
    db.commit()
    db.refresh(order)
    logger.info("Order %s status %s -> %s", order.id, previous.value, order.status.value)
    return order
