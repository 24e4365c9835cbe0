from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.schemas.common import ApiResponse
from corecare.schemas.reports import HealthReport, ReportPeriod
from corecare.scoring.services import build_report

router = APIRouter()


@router.get("/{period}", response_model=ApiResponse[HealthReport])
def read_report(period: ReportPeriod, user_id: Optional[int] = None, db: Session = Depends(deps.get_db)):
    """Daily (today), weekly (last 7 days) or monthly (last 30 days) summary"""
    user_id = deps.require_user_id(user_id)
    return {"status": "success", "data": build_report(db, user_id, period)}
