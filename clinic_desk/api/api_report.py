import logging
from datetime import date
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.login_manager import admin_only
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_report import FinancialSummary, PatientReportFilter, PatientReportResponse
from clinic_desk.services.srv_report import ReportService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/patients", dependencies=[Depends(admin_only)], response_model=DataResponse[PatientReportResponse])
def patient_report(
    filters: Annotated[PatientReportFilter, Query()],
    report_service: ReportService = Depends()
) -> Any:
    """
    Filtered patient visits with statistics: gender split, average age, age
    groups, the ten most prescribed medicines, the ten most common symptoms and
    the revenue charged.

    **Authorization**: admin.
    """
    try:
        report = report_service.patient_report(filters)
        logger.info(f"patient_report success: {report.statistics.total} patients")
        return DataResponse().success_response(data=report)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"patient_report error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.get("/patients/export", dependencies=[Depends(admin_only)])
def export_patient_report(
    filters: Annotated[PatientReportFilter, Query()],
    report_service: ReportService = Depends()
) -> Any:
    try:
        content = report_service.patient_report_csv(filters)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"export_patient_report error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

    filename = f"patient-report-{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@router.get("/financial", dependencies=[Depends(admin_only)], response_model=DataResponse[FinancialSummary])
def financial_summary(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    report_service: ReportService = Depends()
) -> Any:
    """
    Revenue charged to patients against the clinic's expenses for a month or a year.
    """
    try:
        return DataResponse().success_response(data=report_service.financial_summary(year=year, month=month))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"financial_summary error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))
