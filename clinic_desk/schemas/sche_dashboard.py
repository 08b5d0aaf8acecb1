from typing import List

from pydantic import BaseModel

from clinic_desk.schemas.sche_patient import PatientRecord


class DoctorDashboardResponse(BaseModel):
    total_patients: int
    recent_patients: List[PatientRecord]


class AdminDashboardResponse(DoctorDashboardResponse):
    total_medicines: int
    low_stock_medicines: int
