from datetime import datetime
from typing import Annotated, Generic, Optional, TypeVar
from pydantic import BaseModel, PlainSerializer

from corecare.utils.timezone import format_timestamp

T = TypeVar("T")

# Local wall-clock timestamps go over the wire as "YYYY-MM-DD HH:MM:SS"
Timestamp = Annotated[
    datetime,
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every JSON endpoint"""
    status: str = "success"
    message: Optional[str] = None
    data: Optional[T] = None


class UserIdRequest(BaseModel):
    user_id: Optional[int] = None
