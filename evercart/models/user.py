from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from evercart.db.session import Base
import enum

class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)  # always stored lowercased
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.user.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value
