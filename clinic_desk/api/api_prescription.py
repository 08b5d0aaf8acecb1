from typing import Any, List
import logging

from fastapi import APIRouter, Depends

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.login_manager import doctor_only
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_patient import PatientRecord
from clinic_desk.schemas.sche_prescription import (
    PatientVisitRequest,
    PrescriptionDraftResponse,
    PrescriptionLineRequest,
    PrescriptionLineResponse,
)
from clinic_desk.schemas.sche_user import CurrentUser
from clinic_desk.services.srv_prescription import PrescriptionService

router = APIRouter()

logger = logging.getLogger(__name__)


def _draft_response(draft) -> PrescriptionDraftResponse:
    return PrescriptionDraftResponse.model_validate(draft)


@router.post('/quote', response_model=DataResponse[PrescriptionLineResponse])
def quote_line(
    data: PrescriptionLineRequest,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    """
    Convert a quantity between packs and dispensing units without adding it anywhere.

    Used while the doctor types a quantity or toggles between prescribing in
    units (tablets, sachets...) and in packs.
    """
    try:
        line = prescription_service.quote(data)
        return DataResponse().success_response(data=PrescriptionLineResponse.model_validate(line))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"quote_line error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.post('/drafts', response_model=DataResponse[PrescriptionDraftResponse])
def open_draft(
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    """
    Start an empty prescription for a new patient visit.
    """
    draft = prescription_service.open_draft(current_user)
    return DataResponse().success_response(data=_draft_response(draft))


@router.get('/drafts', response_model=DataResponse[List[PrescriptionDraftResponse]])
def get_my_drafts(
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    drafts = prescription_service.get_my_drafts(current_user)
    return DataResponse().success_response(data=[_draft_response(d) for d in drafts])


@router.get('/drafts/{draft_id}', response_model=DataResponse[PrescriptionDraftResponse])
def get_draft(
    draft_id: str,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    draft = prescription_service.get_draft(draft_id, current_user)
    return DataResponse().success_response(data=_draft_response(draft))


@router.post('/drafts/{draft_id}/lines', response_model=DataResponse[PrescriptionDraftResponse])
def add_line(
    draft_id: str,
    data: PrescriptionLineRequest,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    """
    Add a medicine to the prescription.

    **Process**:
    1. Fetch the medicine from the live catalog
    2. Convert the quantity to packs (or units) using the pack size
    3. Refuse if the stock on hand is lower than the request
    4. Refuse if the medicine is already on the prescription

    A refused line leaves the draft unchanged; the message says why.
    """
    try:
        logger.info(f"add_line request: draft_id={draft_id} medicine_id={data.medicine_id} "
                    f"quantity={data.quantity} mode={data.prescription_mode.value}")
        draft = prescription_service.add_line(draft_id, data, current_user)
        return DataResponse().success_response(data=_draft_response(draft))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"add_line error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.delete('/drafts/{draft_id}/lines/{medicine_id}', response_model=DataResponse[PrescriptionDraftResponse])
def remove_line(
    draft_id: str,
    medicine_id: int,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    draft = prescription_service.remove_line(draft_id, medicine_id, current_user)
    return DataResponse().success_response(data=_draft_response(draft))


@router.delete('/drafts/{draft_id}', response_model=DataResponse[bool])
def discard_draft(
    draft_id: str,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    return DataResponse().success_response(data=prescription_service.discard_draft(draft_id, current_user))


@router.post('/drafts/{draft_id}/submit', response_model=DataResponse[PatientRecord])
def submit_draft(
    draft_id: str,
    visit: PatientVisitRequest,
    current_user: CurrentUser = Depends(doctor_only),
    prescription_service: PrescriptionService = Depends()
) -> Any:
    """
    Save the patient record with its prescription.

    The clinic backend deducts each line's `quantity` (in storage units, possibly
    fractional) from the stock. The draft is discarded once the record is saved.
    """
    try:
        logger.info(f"submit_draft request: draft_id={draft_id} patient={visit.name}")
        patient = prescription_service.submit(draft_id, visit, current_user)
        logger.info(f"submit_draft success: draft_id={draft_id}")
        return DataResponse().success_response(data=patient)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"submit_draft error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))
