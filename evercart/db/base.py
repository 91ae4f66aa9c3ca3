# Import every model so Base.metadata knows all tables before create_all
from evercart.db.session import Base
from evercart.models.user import User
from evercart.models.product import Product
from evercart.models.cart import Cart, CartItem
from evercart.models.order import Order, OrderItem
