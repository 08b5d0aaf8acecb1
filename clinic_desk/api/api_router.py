from fastapi import APIRouter

from clinic_desk.api import (
    api_auth,
    api_dashboard,
    api_expense,
    api_healthcheck,
    api_medicine,
    api_patient,
    api_prescription,
    api_report,
    api_user,
)

router = APIRouter()

router.include_router(api_healthcheck.router, tags=["health-check"], prefix="/healthcheck")
router.include_router(api_auth.router, tags=["authentication"], prefix="/auth")
router.include_router(api_user.router, tags=["user"], prefix="/users")
router.include_router(api_dashboard.router, tags=["dashboard"], prefix="/dashboard")
router.include_router(api_medicine.router, tags=["medicine"], prefix="/medicines")
router.include_router(api_prescription.router, tags=["prescription"], prefix="/prescriptions")
router.include_router(api_patient.router, tags=["patient"], prefix="/patients")
router.include_router(api_expense.router, tags=["expense"], prefix="/expenses")
router.include_router(api_report.router, tags=["report"], prefix="/reports")
