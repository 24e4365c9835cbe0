import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from corecare.api import deps
from corecare.crud.vitals import VitalsCRUD
from corecare.reminders.metrics import vitals_recorded_total
from corecare.schemas.common import ApiResponse
from corecare.schemas.vitals import (
    BloodPressureEstimate,
    BloodPressureReading,
    BloodPressureSubmission,
    BloodPressureView,
)
from corecare.scoring import engine

router = APIRouter()

logger = logging.getLogger(__name__)

ESTIMATE_BPM_RANGE = (30, 200)
SYSTOLIC_RANGE = (70, 250)
DIASTOLIC_RANGE = (40, 150)


def build_estimate(bpm: int, data_source: Optional[str] = None, measurement_time=None) -> BloodPressureEstimate:
    estimate = engine.estimate_blood_pressure(bpm)
    classification = engine.classify_blood_pressure(estimate["systolic"], estimate["diastolic"])
    return BloodPressureEstimate(
        **estimate,
        **classification,
        input_bpm=bpm,
        data_source=data_source,
        measurement_time=measurement_time,
    )


@router.get(
    "",
    response_model=ApiResponse[Union[BloodPressureEstimate, List[BloodPressureReading], BloodPressureReading]],
)
def read_blood_pressure(
    user_id: Optional[int] = None,
    type: BloodPressureView = BloodPressureView.ESTIMATE,
    db: Session = Depends(deps.get_db),
):
    """Estimate from the latest heart rate, or stored manual readings"""
    user_id = deps.require_user_id(user_id)

    if type == BloodPressureView.HISTORY:
        return {"status": "success", "data": VitalsCRUD.get_blood_pressure_history(db, user_id)}

    if type == BloodPressureView.LATEST:
        latest = VitalsCRUD.get_latest_blood_pressure(db, user_id)
        if not latest:
            raise HTTPException(status_code=404, detail="No blood pressure readings found")
        return {"status": "success", "data": latest}

    heart_rate = VitalsCRUD.get_latest_heart_rate(db, user_id)
    if heart_rate:
        estimate = build_estimate(heart_rate.bpm, "latest_measurement", heart_rate.recorded_at)
    else:
        estimate = build_estimate(engine.BP_BASELINE_BPM, "baseline_estimation")
    return {"status": "success", "data": estimate}


@router.post("", response_model=ApiResponse[Union[BloodPressureEstimate, BloodPressureReading]])
def submit_blood_pressure(payload: BloodPressureSubmission, db: Session = Depends(deps.get_db)):
    """Store a manual reading (systolic/diastolic) or estimate from a heart rate (bpm, not stored)"""
    deps.require_user_id(payload.user_id)

    if payload.systolic is not None or payload.diastolic is not None:
        if payload.systolic is None or not SYSTOLIC_RANGE[0] <= payload.systolic <= SYSTOLIC_RANGE[1]:
            raise HTTPException(status_code=400, detail="Valid systolic is required (70-250 mmHg)")
        if payload.diastolic is None or not DIASTOLIC_RANGE[0] <= payload.diastolic <= DIASTOLIC_RANGE[1]:
            raise HTTPException(status_code=400, detail="Valid diastolic is required (40-150 mmHg)")
        if payload.diastolic >= payload.systolic:
            raise HTTPException(status_code=400, detail="Diastolic must be lower than systolic")

        user = deps.get_existing_user(db, payload.user_id)
        reading = VitalsCRUD.create_blood_pressure(db, user.id, payload.systolic, payload.diastolic)
        vitals_recorded_total.labels(record_type="blood_pressure").inc()
        return {"status": "success", "message": "Blood pressure stored successfully", "data": reading}

    if payload.bpm is None or not ESTIMATE_BPM_RANGE[0] <= payload.bpm <= ESTIMATE_BPM_RANGE[1]:
        raise HTTPException(status_code=400, detail="Valid bpm is required (30-200 range)")
    return {
        "status": "success",
        "message": "Blood pressure estimated from heart rate",
        "data": build_estimate(payload.bpm, "provided_bpm"),
    }
