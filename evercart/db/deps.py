from typing import Callable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session
from evercart.core.security import decode_access_token
from evercart.db.session import SessionLocal
from evercart.crud import user as crud_user
from evercart.models.user import User, UserRole


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")

# Dependency to get DB
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _token_email(token: str) -> str:
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    email: Optional[str] = payload.get("sub")
    if email is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return email

# Dependency to get the signed-in account from the bearer token
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    user = crud_user.get_user_by_email(db, _token_email(token))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user

def require_role(role: UserRole) -> Callable[..., User]:
    """Build a dependency that only lets accounts holding ``role`` through.

    An identity with no account is reported as 404, an account with another
    role as 403. The resolved account is handed to the route.
    """

    def dependency(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
        user = crud_user.get_user_by_email(db, _token_email(token))
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if user.role != role.value:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{role.value.capitalize()} access required",
            )
        return user

    return dependency

get_current_admin = require_role(UserRole.admin)

def ensure_claim_matches(claimed_email: Optional[str], user: User) -> str:
    """Return the owner key for ``user``, rejecting a body/query email that names someone else."""
    if claimed_email is not None and claimed_email.strip().lower() != user.email:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email does not match the signed-in account",
        )
    return user.email
