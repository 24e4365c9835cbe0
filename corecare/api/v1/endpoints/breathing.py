from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from corecare.schemas.common import ApiResponse
from corecare.services.breathing import BreathingPlan, BreathingState, build_session, session_state

router = APIRouter()


@router.get("/session", response_model=ApiResponse[BreathingPlan])
def read_breathing_session(
    elapsed: Optional[int] = Query(None, ge=0),
    duration: Optional[int] = Query(None, gt=0, le=3600),
):
    """Phase plan for a guided session, with the current phase when `elapsed` is given"""
    return {"status": "success", "data": build_session(total_seconds=duration, elapsed=elapsed)}


@router.post("/session/end", response_model=ApiResponse[BreathingState])
def end_breathing_session(elapsed: int = Query(..., ge=0), duration: Optional[int] = Query(None, gt=0, le=3600)):
    if duration is not None and elapsed > duration:
        raise HTTPException(status_code=400, detail="elapsed cannot exceed duration")
    state = session_state(elapsed, total_seconds=duration, stopped=True)
    return {"status": "success", "message": state.message, "data": state}
