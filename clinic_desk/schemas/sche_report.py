from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from clinic_desk.helpers.enums import Gender
from clinic_desk.schemas.sche_patient import PatientRecord


class PatientReportFilter(BaseModel):
    name: Optional[str] = None
    age_min: Optional[int] = Field(None, ge=0)
    age_max: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    contact_number: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescribed_medicine: Optional[str] = None
    doctor_notes: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    doctor_name: Optional[str] = None


class CountItem(BaseModel):
    name: str
    count: int


class PatientStatistics(BaseModel):
    total: int = 0
    male: int = 0
    female: int = 0
    other: int = 0
    avg_age: float = 0
    age_groups: Dict[str, int] = {}
    top_medicines: List[CountItem] = []
    common_symptoms: List[CountItem] = []
    total_revenue: float = 0


class PatientReportResponse(BaseModel):
    statistics: PatientStatistics
    patients: List[PatientRecord]


class FinancialSummary(BaseModel):
    start_date: date
    end_date: date
    patient_count: int
    revenue: float
    expense_count: int
    expenses: float
    net: float
