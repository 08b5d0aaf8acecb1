import logging

from fastapi import Depends

from clinic_desk.helpers.paging import Page, PaginationParams, page_from_clinic
from clinic_desk.repository.repo_patient import PatientRepository
from clinic_desk.schemas.sche_patient import PatientListParams

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, patient_repo: PatientRepository = Depends()):
        self.patient_repo = patient_repo

    def get_patients(self, params: PatientListParams) -> Page:
        patients, pagination = self.patient_repo.get_page(
            page=params.page,
            limit=params.page_size,
            search=params.search,
            gender=params.gender,
            minAge=params.min_age,
            maxAge=params.max_age,
            symptoms=params.symptoms,
            startDate=params.start_date.isoformat() if params.start_date else None,
            endDate=params.end_date.isoformat() if params.end_date else None,
        )
        logger.debug(f"Fetched {len(patients)} patients for page {params.page}")
        return page_from_clinic(patients, pagination, PaginationParams(page=params.page, page_size=params.page_size))
