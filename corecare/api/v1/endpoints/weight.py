import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.crud.vitals import VitalsCRUD
from corecare.reminders.metrics import vitals_recorded_total
from corecare.schemas.common import ApiResponse
from corecare.schemas.vitals import BmiResult, ReadingView, WeightSubmission

router = APIRouter()

logger = logging.getLogger(__name__)

MAX_WEIGHT_KG = 1000
MAX_HEIGHT_CM = 300


async def read_weight_submission(request: Request) -> WeightSubmission:
    """The app posts JSON; older builds post form data"""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            raw = await request.json()
        else:
            raw = dict(await request.form())
    except ValueError:
        # Malformed JSON or a body that is not UTF-8
        raise HTTPException(status_code=400, detail="Invalid JSON data")
    if not isinstance(raw, dict):
        raise HTTPException(status_code=400, detail="No data received")

    # Blank form fields count as missing
    raw = {k: v for k, v in raw.items() if v not in ("", None)}
    try:
        return WeightSubmission.model_validate(raw)
    except ValidationError as e:
        field = e.errors()[0]["loc"][0]
        messages = {
            "user_id": "Valid user_id is required",
            "weight": f"Valid weight is required (0-{MAX_WEIGHT_KG} kg)",
            "height": f"Valid height is required (0-{MAX_HEIGHT_CM} cm)",
        }
        raise HTTPException(status_code=400, detail=messages.get(field, "Invalid request data"))


@router.post("", response_model=ApiResponse[BmiResult])
async def record_weight(request: Request, db: Session = Depends(deps.get_db)):
    """Store weight and height and return the derived BMI"""
    payload = await read_weight_submission(request)
    deps.require_user_id(payload.user_id)
    if payload.weight is None or not 0 < payload.weight <= MAX_WEIGHT_KG:
        raise HTTPException(status_code=400, detail=f"Valid weight is required (0-{MAX_WEIGHT_KG} kg)")
    if payload.height is None or not 0 < payload.height <= MAX_HEIGHT_CM:
        raise HTTPException(status_code=400, detail=f"Valid height is required (0-{MAX_HEIGHT_CM} cm)")

    user = deps.get_existing_user(db, payload.user_id)
    try:
        record = VitalsCRUD.create_bmi_record(db, user.id, payload.weight, payload.height)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    vitals_recorded_total.labels(record_type="bmi").inc()
    return {"status": "success", "message": "BMI data saved successfully", "data": BmiResult.from_record(record)}


@router.get("", response_model=ApiResponse[Union[List[BmiResult], BmiResult]])
def read_weight(
    user_id: Optional[int] = None,
    type: ReadingView = ReadingView.LATEST,
    db: Session = Depends(deps.get_db),
):
    user_id = deps.require_user_id(user_id)

    if type == ReadingView.HISTORY:
        records = VitalsCRUD.get_bmi_history(db, user_id)
        return {"status": "success", "data": [BmiResult.from_record(r) for r in records]}

    latest = VitalsCRUD.get_latest_bmi(db, user_id)
    if not latest:
        raise HTTPException(status_code=404, detail="No BMI record found for this user")
    return {"status": "success", "data": BmiResult.from_record(latest)}
