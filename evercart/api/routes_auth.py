import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from evercart.core.config import settings
from evercart.core.security import create_access_token, verify_password
from evercart.crud import user as crud_user
from evercart.db.deps import get_db
from evercart.models.user import User, UserRole
from evercart.schemas.user import AdminCreate, LoginResponse, SignupResponse, UserLogin, UserPublic, UserSignup

logger = logging.getLogger(__name__)

router = APIRouter()

def _login_response(user: User, message: str) -> LoginResponse:
    return LoginResponse(
        message=message,
        access_token=create_access_token(data={"sub": user.email}),
        user=UserPublic.model_validate(user),
    )

def _authenticate(db: Session, email: str, password: str) -> User:
    user = crud_user.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return user

@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(data: UserSignup, db: Session = Depends(get_db)):
    # Role is never taken from the request
    try:
        user = crud_user.create_user(db, name=data.name, email=data.email, password=data.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SignupResponse(message="User registered successfully", user=UserPublic.model_validate(user))

@router.post("/login", response_model=LoginResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = _authenticate(db, data.email, data.password)
    return _login_response(user, "Login successful")

@router.post("/admin/login", response_model=LoginResponse)
def admin_login(data: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, data.email)
    if user and not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    user = _authenticate(db, data.email, data.password)
    return _login_response(user, "Admin login successful")

@router.post("/admin/create", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def create_admin(data: AdminCreate, db: Session = Depends(get_db)):
    """Bootstrap an admin account, guarded by the configured admin key."""
    if data.admin_key != settings.ADMIN_KEY:
        logger.warning("Rejected admin creation for %s: invalid admin key", data.email)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid admin key")
    try:
        admin = crud_user.create_user(
            db, name=data.name, email=data.email, password=data.password, role=UserRole.admin
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SignupResponse(message="Admin created successfully", user=UserPublic.model_validate(admin))
