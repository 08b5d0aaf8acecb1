from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from clinic_desk.schemas.sche_base import ClinicPayload, ClinicRecord


class ExpenseRecord(ClinicRecord):
    id: int
    expense_date: date
    description: Optional[str] = ''
    amount: float


class ExpenseRequest(ClinicPayload):
    expense_date: date
    description: Optional[str] = ''
    amount: float


class ExpensePeriodParams(BaseModel):
    year: Optional[int] = Field(None, ge=1900, le=9999, description="Defaults to the current year")
    month: Optional[int] = Field(None, ge=1, le=12, description="Leave empty for the whole year")


class ExpenseListResponse(BaseModel):
    start_date: date
    end_date: date
    expenses: List[ExpenseRecord]
    total: float
    total_display: str
