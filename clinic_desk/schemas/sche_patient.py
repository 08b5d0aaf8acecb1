from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from clinic_desk.schemas.sche_base import ClinicRecord


class PrescribedMedicineRecord(ClinicRecord):
    medicine_id: Optional[int] = None
    name: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    dispensed_quantity: Optional[float] = None
    dispensed_unit: Optional[str] = None
    dosage: Optional[str] = None


class DoctorRef(ClinicRecord):
    full_name: Optional[str] = None


class PatientRecord(ClinicRecord):
    id: Optional[int] = None
    name: str
    age: int = 0
    gender: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescribed_medicines: Optional[List[PrescribedMedicineRecord]] = None
    doctor_notes: Optional[str] = None
    follow_up_date: Optional[date] = None
    amount_charged: float = 0
    visit_date: Optional[datetime] = None
    doctor: Optional[DoctorRef] = None


class PatientListParams(BaseModel):
    page: int = Field(1, gt=0)
    page_size: int = Field(20, gt=0, le=1000)
    search: Optional[str] = None
    gender: Optional[str] = None
    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)
    symptoms: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
