from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.schemas.common import ApiResponse
from corecare.schemas.vitals import StressResult
from corecare.scoring.services import compute_stress

router = APIRouter()


@router.get("", response_model=ApiResponse[StressResult])
def read_stress(user_id: Optional[int] = None, db: Session = Depends(deps.get_db)):
    """Stress level from the 30 most recent heart rates and the latest blood pressure"""
    user_id = deps.require_user_id(user_id, "Invalid user_id")
    return {"status": "success", "data": compute_stress(db, user_id)}
