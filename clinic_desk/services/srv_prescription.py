"""
Prescription service - the doctor's "new patient" form without the UI.

A draft collects prescription lines for one visit. Every line is checked against
the live catalog when it is added; the draft is submitted together with the
patient details and the backend deducts the stock.
"""
import logging
from typing import List

from fastapi import Depends

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.prescribing import PrescriptionError, PrescriptionLine, prescribe, quote_line, remove_line
from clinic_desk.repository.repo_medicine import MedicineRepository
from clinic_desk.repository.repo_patient import PatientRepository
from clinic_desk.repository.repo_prescription_draft import (
    PrescriptionDraft,
    PrescriptionDraftRepository,
    draft_lock,
    get_draft_repository,
)
from clinic_desk.schemas.sche_medicine import MedicineRecord
from clinic_desk.schemas.sche_patient import PatientRecord
from clinic_desk.schemas.sche_prescription import (
    PatientSubmission,
    PatientVisitRequest,
    PrescribedMedicinePayload,
    PrescriptionLineRequest,
)
from clinic_desk.schemas.sche_user import CurrentUser

logger = logging.getLogger(__name__)


def to_prescribed_medicine(line: PrescriptionLine) -> PrescribedMedicinePayload:
    return PrescribedMedicinePayload(
        medicine_id=line.medicine_id,
        name=line.name,
        quantity=line.quantity,
        unit=line.unit,
        dispensed_quantity=line.quantity_in_units,
        dispensed_unit=line.dispensing_unit,
        dosage=line.dosage,
    )


class PrescriptionService:
    def __init__(
        self,
        medicine_repo: MedicineRepository = Depends(),
        patient_repo: PatientRepository = Depends(),
        draft_repo: PrescriptionDraftRepository = Depends(get_draft_repository),
    ):
        self.medicine_repo = medicine_repo
        self.patient_repo = patient_repo
        self.draft_repo = draft_repo

    def _get_medicine(self, medicine_id: int) -> MedicineRecord:
        medicine = self.medicine_repo.get_by_id(medicine_id)
        if not medicine:
            raise CustomException(http_code=404, code='404', message='Medicine not found')
        return medicine

    def _get_draft(self, draft_id: str, current_user: CurrentUser) -> PrescriptionDraft:
        draft = self.draft_repo.get(draft_id, current_user.user_id)
        if not draft:
            raise CustomException(http_code=404, code='404', message='Prescription draft not found')
        return draft

    def open_draft(self, current_user: CurrentUser) -> PrescriptionDraft:
        draft = self.draft_repo.create(current_user.user_id)
        logger.info(f"Prescription draft opened: draft_id={draft.draft_id} doctor={current_user.username}")
        return draft

    def get_draft(self, draft_id: str, current_user: CurrentUser) -> PrescriptionDraft:
        return self._get_draft(draft_id, current_user)

    def get_my_drafts(self, current_user: CurrentUser) -> List[PrescriptionDraft]:
        return self.draft_repo.get_all_for_doctor(current_user.user_id)

    def quote(self, data: PrescriptionLineRequest) -> PrescriptionLine:
        """Convert a quantity for display without touching any draft."""
        medicine = self._get_medicine(data.medicine_id)
        try:
            return quote_line(medicine, data.quantity, data.prescription_mode)
        except PrescriptionError as e:
            raise CustomException(http_code=400, code='400', message=e.message)

    def add_line(self, draft_id: str, data: PrescriptionLineRequest, current_user: CurrentUser) -> PrescriptionDraft:
        self._get_draft(draft_id, current_user)
        medicine = self._get_medicine(data.medicine_id)

        with draft_lock:
            draft = self._get_draft(draft_id, current_user)
            try:
                line = prescribe(draft.lines, medicine, data.quantity, data.prescription_mode)
            except PrescriptionError as e:
                logger.info(f"Prescription line refused: draft_id={draft_id} medicine_id={medicine.id}: {e.message}")
                raise CustomException(http_code=400, code='400', message=e.message)
            self.draft_repo.touch(draft)

        logger.info(f"{line.base_name} added to prescription: draft_id={draft_id} dosage={line.dosage}")
        return draft

    def remove_line(self, draft_id: str, medicine_id: int, current_user: CurrentUser) -> PrescriptionDraft:
        with draft_lock:
            draft = self._get_draft(draft_id, current_user)
            try:
                removed = remove_line(draft.lines, medicine_id)
            except PrescriptionError as e:
                raise CustomException(http_code=404, code='404', message=e.message)
            self.draft_repo.touch(draft)

        logger.info(f"{removed.base_name} removed from prescription: draft_id={draft_id}")
        return draft

    def discard_draft(self, draft_id: str, current_user: CurrentUser) -> bool:
        with draft_lock:
            self._get_draft(draft_id, current_user)
            return self.draft_repo.delete(draft_id)

    def submit(self, draft_id: str, visit: PatientVisitRequest, current_user: CurrentUser) -> PatientRecord:
        # Taken out of the store before posting, so a second submit of the same draft gets a 404
        with draft_lock:
            draft = self._get_draft(draft_id, current_user)
            if not draft.lines:
                raise CustomException(http_code=400, code='400', message='Please prescribe at least one medicine')
            self.draft_repo.delete(draft_id)

        submission = PatientSubmission(
            **visit.model_dump(),
            prescribed_medicines=[to_prescribed_medicine(line) for line in draft.lines],
        )
        try:
            created = self.patient_repo.create(submission)
        except Exception:
            logger.warning(f"Patient record not saved, prescription draft kept: draft_id={draft_id}")
            self.draft_repo.restore(draft)
            raise
        logger.info(f"Patient record submitted: draft_id={draft_id} lines={len(draft.lines)} doctor={current_user.username}")

        if created is None:
            return PatientRecord(**submission.model_dump(mode='json'))
        return created
