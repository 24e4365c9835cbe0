from fastapi import APIRouter

from corecare.api.v1.endpoints import (
    auth,
    user,
    heartbeat,
    bp,
    weight,
    stress,
    mood_wellness,
    reports,
    risk_assessment,
    breathing,
    privacy,
)
from corecare.reminders.api import router as reminders_router

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(user.router, prefix="/user", tags=["profile"])
api_router.include_router(heartbeat.router, prefix="/heartbeat", tags=["heart-rate"])
api_router.include_router(bp.router, prefix="/bp", tags=["blood-pressure"])
api_router.include_router(weight.router, prefix="/weight", tags=["weight"])
api_router.include_router(stress.router, prefix="/stress", tags=["stress"])
api_router.include_router(mood_wellness.router, prefix="/mood-wellness", tags=["mood"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(risk_assessment.router, prefix="/risk-assessment", tags=["risk"])
api_router.include_router(reminders_router, prefix="/reminders", tags=["reminders"])
api_router.include_router(breathing.router, prefix="/breathing", tags=["breathing"])
api_router.include_router(privacy.router, prefix="/privacy", tags=["legal"])
