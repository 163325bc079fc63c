from pydantic import BaseModel
from typing import Any, Dict, Literal, Optional

# --- Uniform response envelope ---

class ApiResponse(BaseModel):
    result: Literal["success", "error"]
    data: Optional[Any] = None
    error: Optional[str] = None

# --- Payloads carried in `data` ---

class ReservationCreated(BaseModel):
    reservationId: str
    message: str

class QuotaSummary(BaseModel):
    treatmentCounts: Dict[str, int]
    slotCounts: Dict[str, int]

class DuplicateCheck(BaseModel):
    isDuplicate: bool
