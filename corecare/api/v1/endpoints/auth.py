import logging
import re

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from corecare import crud, models
from corecare.api import deps
from corecare.core import security
from corecare.schemas.common import ApiResponse
from corecare.schemas.user import Credentials, LoginResult, PasswordReset, Profile, RegisterResult

router = APIRouter()

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"^\+?[0-9 ]{7,15}$")
_email_adapter = TypeAdapter(EmailStr)


def split_contact(identifier: str):
    """Return (email, phone) for an email-or-phone string, or raise 400"""
    try:
        _email_adapter.validate_python(identifier)
        return identifier, None
    except ValidationError:
        pass
    if PHONE_RE.match(identifier):
        return None, identifier
    raise HTTPException(status_code=400, detail="Please enter a valid email or phone number")


def _require_credentials(payload: Credentials):
    if payload.email_or_phone is None or payload.password is None:
        raise HTTPException(status_code=400, detail="Email/phone and password required")
    identifier = payload.email_or_phone.strip()
    if not identifier or not payload.password.strip():
        raise HTTPException(status_code=400, detail="Email/phone and password cannot be empty")
    return identifier, payload.password


@router.post("/register", response_model=ApiResponse[RegisterResult])
def register(payload: Credentials, db: Session = Depends(deps.get_db)):
    identifier, password = _require_credentials(payload)

    if not security.is_strong_password(password):
        raise HTTPException(
            status_code=400,
            detail="Password must be at least 8 characters with uppercase, lowercase, number, and symbol",
        )
    email, phone = split_contact(identifier)
    if crud.user.get_by_email_or_phone(db, identifier=identifier):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email or phone already exists")

    user = crud.user.create(db, email=email, phone=phone, password=password)
    return {"status": "success", "message": "User registered successfully", "data": {"user_id": user.id}}


@router.post("/login", response_model=ApiResponse[LoginResult])
def login(payload: Credentials, db: Session = Depends(deps.get_db)):
    identifier, password = _require_credentials(payload)

    user = crud.user.get_by_email_or_phone(db, identifier=identifier)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not security.verify_password(password, user.hashed_password):
        logger.warning(f"[Auth] Failed login for user {user.id}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    return {
        "status": "success",
        "message": "Login successful",
        "data": LoginResult(
            user_id=user.id,
            email_or_phone=identifier,
            access_token=security.create_access_token(user.id),
        ),
    }


@router.post("/forgot", response_model=ApiResponse[RegisterResult])
def forgot_password(payload: PasswordReset, db: Session = Depends(deps.get_db)):
    """Verify an account exists, or reset its password when new passwords are supplied"""
    identifier = (payload.email_or_phone or "").strip()
    if not identifier:
        raise HTTPException(status_code=400, detail="Email or phone is required")

    user = crud.user.get_by_email_or_phone(db, identifier=identifier)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    new_password = payload.new_password or ""
    confirm_password = payload.confirm_password or ""
    if not new_password and not confirm_password:
        return {"status": "success", "message": "User exists. You can reset password.", "data": {"user_id": user.id}}

    if new_password != confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    if len(new_password) < security.MIN_RESET_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail="Password too short")

    crud.user.set_password(db, db_obj=user, password=new_password)
    logger.info(f"[Auth] Password reset for user {user.id}")
    return {"status": "success", "message": "Password reset successfully", "data": {"user_id": user.id}}


@router.get("/me", response_model=ApiResponse[Profile])
def read_current_user(current_user: models.User = Depends(deps.get_current_user)):
    return {"status": "success", "data": Profile.from_user(current_user)}
