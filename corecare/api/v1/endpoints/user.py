import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from corecare import crud
from corecare.api import deps
from corecare.schemas.common import ApiResponse, UserIdRequest
from corecare.schemas.user import Profile, ProfileUpdate

router = APIRouter()

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def _is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        _email_adapter.validate_python(value)
        return True
    except ValidationError:
        return False


@router.get("", response_model=ApiResponse[Profile])
def read_profile(user_id: Optional[int] = None, db: Session = Depends(deps.get_db)):
    user = deps.get_existing_user(db, user_id, "Invalid user_id provided")
    return {"status": "success", "data": Profile.from_user(user)}


@router.post("", response_model=ApiResponse[Profile])
def update_profile(payload: ProfileUpdate, db: Session = Depends(deps.get_db)):
    deps.require_user_id(payload.user_id, "Invalid user_id")
    payload.name = (payload.name or "").strip()
    payload.email = (payload.email or "").strip()
    if not payload.name:
        raise HTTPException(status_code=400, detail="Name is required")
    if payload.age is None or payload.age <= 0:
        raise HTTPException(status_code=400, detail="Valid age is required")
    if not _is_valid_email(payload.email):
        raise HTTPException(status_code=400, detail="Valid email is required")

    user = deps.get_existing_user(db, payload.user_id, "Invalid user_id")
    if crud.user.contact_taken(db, user_id=user.id, email=payload.email, phone=payload.phone):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or phone already in use by another account")

    changed = crud.user.update_profile(db, db_obj=user, obj_in=payload)
    message = "Profile updated successfully" if changed else "No changes made to profile"
    logger.info(f"[Profile] user {user.id}: {message}")
    return {"status": "success", "message": message, "data": Profile.from_user(user)}


@router.delete("", response_model=ApiResponse[UserIdRequest])
def delete_account(payload: UserIdRequest, db: Session = Depends(deps.get_db)):
    user = deps.get_existing_user(db, payload.user_id, "Invalid user_id provided")
    user_id = user.id
    crud.user.remove(db, db_obj=user)
    return {"status": "success", "message": "Account deleted successfully", "data": {"user_id": user_id}}
