from typing import Any

from fastapi import APIRouter, Depends

from clinic_desk.helpers.login_manager import admin_only, doctor_only
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_dashboard import AdminDashboardResponse, DoctorDashboardResponse
from clinic_desk.services.srv_dashboard import DashboardService

router = APIRouter()


@router.get("/admin", dependencies=[Depends(admin_only)], response_model=DataResponse[AdminDashboardResponse])
def admin_dashboard(dashboard_service: DashboardService = Depends()) -> Any:
    return DataResponse().success_response(data=dashboard_service.admin_dashboard())


@router.get("/doctor", dependencies=[Depends(doctor_only)], response_model=DataResponse[DoctorDashboardResponse])
def doctor_dashboard(dashboard_service: DashboardService = Depends()) -> Any:
    return DataResponse().success_response(data=dashboard_service.doctor_dashboard())
