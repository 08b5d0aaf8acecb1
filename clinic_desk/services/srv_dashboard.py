import logging

from fastapi import Depends

from clinic_desk.core.config import settings
from clinic_desk.helpers.enums import StockStatus
from clinic_desk.repository.repo_medicine import MedicineRepository
from clinic_desk.repository.repo_patient import PatientRepository
from clinic_desk.schemas.sche_dashboard import AdminDashboardResponse, DoctorDashboardResponse
from clinic_desk.services.srv_medicine import stock_status

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, patient_repo: PatientRepository = Depends(), medicine_repo: MedicineRepository = Depends()):
        self.patient_repo = patient_repo
        self.medicine_repo = medicine_repo

    def _recent_patients(self):
        patients, pagination = self.patient_repo.get_page(page=1, limit=settings.RECENT_PATIENTS_LIMIT)
        return patients, int(pagination.get('total', len(patients)))

    def doctor_dashboard(self) -> DoctorDashboardResponse:
        recent, total = self._recent_patients()
        return DoctorDashboardResponse(total_patients=total, recent_patients=recent)

    def admin_dashboard(self) -> AdminDashboardResponse:
        recent, total = self._recent_patients()
        medicines = self.medicine_repo.get_all()
        low_stock = [m for m in medicines if stock_status(m) != StockStatus.AVAILABLE]
        logger.debug(f"Admin dashboard: {len(medicines)} medicines, {len(low_stock)} low on stock")
        return AdminDashboardResponse(
            total_patients=total,
            recent_patients=recent,
            total_medicines=len(medicines),
            low_stock_medicines=len(low_stock),
        )
