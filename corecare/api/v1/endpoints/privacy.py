from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

PRIVACY_PAGE = Path(__file__).resolve().parents[3] / "static" / "privacy.html"


@router.get("", response_class=HTMLResponse)
def read_privacy_policy():
    """Privacy policy and terms, as shown in the app's settings screen"""
    return HTMLResponse(PRIVACY_PAGE.read_text(encoding="utf-8"))
