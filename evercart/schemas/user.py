from pydantic import EmailStr, Field
from typing import Literal, Optional
from datetime import datetime
from evercart.schemas.base import CamelModel

class UserSignup(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str

class UserLogin(CamelModel):
    email: EmailStr
    password: str

class AdminCreate(UserSignup):
    admin_key: str

class UserPublic(CamelModel):
    name: str
    email: str
    role: str

class UserOut(UserPublic):
    id: int
    created_at: Optional[datetime] = None

class SignupResponse(CamelModel):
    message: str
    user: UserPublic

class LoginResponse(CamelModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserPublic

class AdminUserUpdate(CamelModel):
    email: Optional[EmailStr] = None  # claimed admin identity
    name: Optional[str] = Field(None, min_length=1)
    user_email: Optional[EmailStr] = None  # new email for the target account
    role: Optional[Literal["user", "admin"]] = None

class UserDeleted(CamelModel):
    id: int
    name: str
    email: str
