import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.login_manager import staff
from clinic_desk.helpers.paging import Page
from clinic_desk.schemas.sche_patient import PatientListParams, PatientRecord
from clinic_desk.services.srv_patient import PatientService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", dependencies=[Depends(staff)], response_model=Page[PatientRecord])
def get_patients(
    params: Annotated[PatientListParams, Query()],
    patient_service: PatientService = Depends()
) -> Any:
    """
    Paged patient visits, newest first, filtered by the clinic backend.
    """
    try:
        return patient_service.get_patients(params)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_patients error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))
