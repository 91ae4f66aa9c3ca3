from sqlalchemy import Column, Integer, String, ForeignKey, Float, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from evercart.db.session import Base
import enum

class OrderStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"

class PaymentMethod(str, enum.Enum):
    card = "card"
    cash_on_delivery = "cash_on_delivery"
    upi = "upi"

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_email = Column(String, nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    status = Column(
        Enum(OrderStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=OrderStatus.pending,
    )
    payment_method = Column(
        Enum(PaymentMethod, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=PaymentMethod.cash_on_delivery,
    )

    # Delivery address
    full_name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    phone = Column(String, nullable=False)

    order_date = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @property
    def delivery_address(self) -> dict:
        return {
            "full_name": self.full_name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "phone": self.phone,
        }

class OrderItem(Base):
    """Product data captured at checkout; never re-joined with the live catalog."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    product_image = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    order = relationship("Order", back_populates="items")
