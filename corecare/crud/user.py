from typing import Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from corecare.core.security import get_password_hash, verify_password
from corecare.models.user import User
from corecare.schemas.user import ProfileUpdate

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "age", "sex", "height", "phone", "email", "profile_picture")


class CRUDUser:
    def create(self, db: Session, *, email: Optional[str], phone: Optional[str], password: str) -> User:
        db_obj = User(
            email=email,
            phone=phone,
            hashed_password=get_password_hash(password),
            height="0",
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"[CRUDUser] Created user {db_obj.id}")
        return db_obj

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    def get_by_email_or_phone(self, db: Session, *, identifier: str) -> Optional[User]:
        return db.query(User).filter(or_(User.email == identifier, User.phone == identifier)).first()

    def contact_taken(self, db: Session, *, user_id: int, email: Optional[str], phone: Optional[str]) -> bool:
        """True when another account already uses this email or phone"""
        clauses = []
        if email:
            clauses.append(User.email == email)
        if phone:
            clauses.append(User.phone == phone)
        if not clauses:
            return False
        return db.query(User).filter(User.id != user_id, or_(*clauses)).first() is not None

    def set_password(self, db: Session, *, db_obj: User, password: str) -> User:
        db_obj.hashed_password = get_password_hash(password)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_profile(self, db: Session, *, db_obj: User, obj_in: ProfileUpdate) -> bool:
        """Apply profile fields; returns False when nothing changed."""
        update_data = obj_in.model_dump(include=set(PROFILE_FIELDS))
        # A blank contact field keeps the stored value; it may be the login identifier
        for field in ("phone", "email"):
            if not update_data.get(field):
                update_data.pop(field)

        changed = False
        for field, value in update_data.items():
            if getattr(db_obj, field) != value:
                setattr(db_obj, field, value)
                changed = True

        if not changed:
            return False
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return True

    def remove(self, db: Session, *, db_obj: User) -> None:
        # Readings are removed through the relationship cascade in the same transaction
        try:
            db.delete(db_obj)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"[CRUDUser] Deleted user {db_obj.id} and all readings")


# Create instance that can be imported directly
user = CRUDUser()
