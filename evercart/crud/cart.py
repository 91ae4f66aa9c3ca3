import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from evercart.crud import product as crud_product
from evercart.models.cart import Cart, CartItem
from evercart.models.product import Product

logger = logging.getLogger(__name__)


class CartNotFound(LookupError):
    def __init__(self):
        super().__init__("Cart not found")


class CartItemNotFound(LookupError):
    def __init__(self):
        super().__init__("Product not found in cart")


def get_cart_by_email(db: Session, user_email: str) -> Optional[Cart]:
    return db.query(Cart).filter(Cart.user_email == user_email).first()

def get_or_create_cart(db: Session, user_email: str) -> Cart:
    cart = get_cart_by_email(db, user_email)
    if cart:
        return cart

    cart = Cart(user_email=user_email)
    db.add(cart)
    try:
        db.flush()
    except IntegrityError:
        # A concurrent request created the cart first
        db.rollback()
        cart = get_cart_by_email(db, user_email)
        if cart is None:
            raise
    else:
        logger.info("Created cart for %s", user_email)
    return cart

def _increment_line(db: Session, cart_id: int, product_id: int, quantity: int) -> bool:
    updated = (
        db.query(CartItem)
        .filter(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
        .update({CartItem.quantity: CartItem.quantity + quantity}, synchronize_session=False)
    )
    return updated > 0

def add_to_cart(db: Session, user_email: str, product_id: int, quantity: int = 1) -> Cart:
    """Add ``quantity`` of a product, merging into an existing line.

    The product is not looked up here; a dangling line shows up when the
    cart is read or checked out.
    """
    if quantity is None:
        quantity = 1
    if quantity <= 0:
        raise ValueError("Quantity must be greater than 0")

    cart = get_or_create_cart(db, user_email)
    if not _increment_line(db, cart.id, product_id, quantity):
        db.add(CartItem(cart_id=cart.id, product_id=product_id, quantity=quantity))
        try:
            db.flush()
        except IntegrityError:
            # Lost the insert race for this line, fold into the winner's row
            db.rollback()
            cart = get_or_create_cart(db, user_email)
            if not _increment_line(db, cart.id, product_id, quantity):
                raise

    db.commit()
    return cart

def join_products(db: Session, items: List[CartItem]) -> List[Tuple[CartItem, Optional[Product]]]:
    products = crud_product.get_products_by_ids(db, [item.product_id for item in items])
    return [(item, products.get(item.product_id)) for item in items]

def get_cart(db: Session, user_email: str) -> List[Tuple[CartItem, Optional[Product]]]:
    """Cart lines with their products resolved; a missing cart reads as empty."""
    cart = get_cart_by_email(db, user_email)
    if cart is None:
        return []
    return join_products(db, cart.items)

def _find_line(cart: Cart, product_id: int) -> CartItem:
    for item in cart.items:
        if item.product_id == product_id:
            return item
    raise CartItemNotFound()

def update_cart_item(db: Session, user_email: str, product_id: int, quantity: int) -> Cart:
    """Set a line's quantity exactly; zero or less drops the line."""
    cart = get_cart_by_email(db, user_email)
    if cart is None:
        raise CartNotFound()

    item = _find_line(cart, product_id)
    if quantity <= 0:
        cart.items.remove(item)
    else:
        item.quantity = quantity

    db.commit()
    return cart

def remove_from_cart(db: Session, user_email: str, product_id: int) -> Cart:
    cart = get_cart_by_email(db, user_email)
    if cart is None:
        raise CartNotFound()

    cart.items.remove(_find_line(cart, product_id))
    db.commit()
    return cart

def clear_cart(db: Session, user_email: str) -> int:
    """Empty the cart and return how many distinct lines it held."""
    cart = get_cart_by_email(db, user_email)
    if cart is None:
        get_or_create_cart(db, user_email)
        db.commit()
        return 0

    previous_item_count = len(cart.items)
    cart.items.clear()
    db.commit()
    logger.info("Cleared cart for %s (%d lines)", user_email, previous_item_count)
    return previous_item_count
