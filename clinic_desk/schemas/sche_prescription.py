from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from clinic_desk.helpers.enums import Gender, PrescriptionMode
from clinic_desk.schemas.sche_base import ClinicPayload


class PrescriptionLineRequest(BaseModel):
    medicine_id: int
    quantity: float = Field(..., gt=0, description="Amount in the unit chosen by prescription_mode")
    prescription_mode: PrescriptionMode = PrescriptionMode.UNITS


class PrescriptionLineResponse(BaseModel):
    medicine_id: int
    name: str
    base_name: str
    prescription_mode: PrescriptionMode
    quantity: float = Field(..., description="Exact amount deducted from stock, in storage units")
    unit: str
    quantity_in_units: float
    dispensing_unit: str
    pack_size: Optional[int] = None
    has_pack_info: bool
    dosage: str

    model_config = ConfigDict(from_attributes=True)


class PrescriptionDraftResponse(BaseModel):
    draft_id: str
    doctor_id: str
    created_at: datetime
    updated_at: datetime
    lines: List[PrescriptionLineResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PatientVisitRequest(BaseModel):
    """Patient details entered alongside the prescription."""
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=150)
    gender: Gender = Gender.MALE
    contact_number: Optional[str] = ''
    address: Optional[str] = ''
    symptoms: str = Field(..., min_length=1)
    diagnosis: Optional[str] = ''
    doctor_notes: Optional[str] = ''
    follow_up_date: Optional[date] = None
    amount_charged: float = Field(0, ge=0)


class PrescribedMedicinePayload(ClinicPayload):
    medicine_id: int
    name: str
    quantity: float
    unit: str
    dispensed_quantity: float
    dispensed_unit: str
    dosage: str


class PatientSubmission(ClinicPayload):
    name: str
    age: int
    gender: Gender
    contact_number: Optional[str] = ''
    address: Optional[str] = ''
    symptoms: str
    diagnosis: Optional[str] = ''
    prescribed_medicines: List[PrescribedMedicinePayload]
    doctor_notes: Optional[str] = ''
    follow_up_date: Optional[date] = None
    amount_charged: float = 0
