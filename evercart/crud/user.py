import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from evercart.core.config import settings
from evercart.core.security import hash_password
from evercart.models.cart import Cart
from evercart.models.order import Order
from evercart.models.user import User, UserRole

logger = logging.getLogger(__name__)

def normalize_email(email: str) -> str:
    return email.strip().lower()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()

def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()

def create_user(db: Session, name: str, email: str, password: str, role: UserRole = UserRole.user) -> User:
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValueError(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
        )
    if get_user_by_email(db, email):
        raise ValueError("Email already registered")

    new_user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role.value,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Created %s account %s", new_user.role, new_user.email)
    return new_user

def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

def _move_owned_records(db: Session, old_email: str, new_email: str) -> None:
    """Re-key the cart and order history from ``old_email`` to ``new_email``."""
    # A cart left under the new address by a removed account would clash on carts.user_email
    stale_cart = db.query(Cart).filter(Cart.user_email == new_email).first()
    if stale_cart:
        db.delete(stale_cart)
        db.flush()

    db.query(Cart).filter(Cart.user_email == old_email).update(
        {Cart.user_email: new_email}, synchronize_session=False
    )
    moved_orders = db.query(Order).filter(Order.user_email == old_email).update(
        {Order.user_email: new_email}, synchronize_session=False
    )
    logger.info("Moved cart and %d orders from %s to %s", moved_orders, old_email, new_email)

def update_user(
    db: Session,
    user_id: int,
    name: Optional[str] = None,
    email: Optional[str] = None,
    role: Optional[str] = None,
) -> Optional[User]:
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    if email is not None:
        email = normalize_email(email)
        clash = get_user_by_email(db, email)
        if clash and clash.id != user.id:
            raise ValueError("Email already exists")
        if email != user.email:
            _move_owned_records(db, user.email, email)
        user.email = email
    if name is not None:
        user.name = name.strip()
    if role is not None:
        user.role = UserRole(role).value

    db.commit()
    db.refresh(user)
    return user

def delete_user(db: Session, user_id: int) -> Optional[dict]:
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    deleted = {"id": user.id, "name": user.name, "email": user.email}
    cart = db.query(Cart).filter(Cart.user_email == user.email).first()
    if cart:
        db.delete(cart)
    # Orders are the sales record and stay keyed by the address; a new
    # account registered under it later sees them as its own history.
    db.delete(user)
    db.commit()
    logger.info("Deleted account %s", deleted["email"])
    return deleted
