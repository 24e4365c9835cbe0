from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.schemas.common import ApiResponse
from corecare.schemas.reports import RiskAssessment
from corecare.scoring.services import assess_daily_risk

router = APIRouter()


@router.get("", response_model=ApiResponse[RiskAssessment])
def read_risk_assessment(user_id: Optional[int] = None, db: Session = Depends(deps.get_db)):
    user_id = deps.require_user_id(user_id, "Valid user_id required")
    assessment = assess_daily_risk(db, user_id)
    if assessment is None:
        raise HTTPException(status_code=404, detail="No readings for today")
    return {"status": "success", "data": assessment}
