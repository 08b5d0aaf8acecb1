from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends

from clinic_desk.clients.base import get_clinic_client
from clinic_desk.clients.clinic_api import ClinicApiClient
from clinic_desk.schemas.sche_patient import PatientRecord
from clinic_desk.schemas.sche_prescription import PatientSubmission


class PatientRepository:
    def __init__(self, client: ClinicApiClient = Depends(get_clinic_client)):
        self.client = client

    def get_page(self, page: int = 1, limit: int = 20, **filters: Any) -> Tuple[List[PatientRecord], Dict[str, Any]]:
        params = {'page': page, 'limit': limit}
        params.update(filters)
        body = self.client.get('/patients', params=params) or {}
        patients = [PatientRecord.model_validate(item) for item in body.get('patients') or []]
        return patients, body.get('pagination') or {}

    def get_all(self, limit: int) -> List[PatientRecord]:
        patients, _ = self.get_page(page=1, limit=limit)
        return patients

    def create(self, submission: PatientSubmission) -> Optional[PatientRecord]:
        body = self.client.post('/patients', json=submission.to_clinic())
        if isinstance(body, dict) and 'name' in body:
            return PatientRecord.model_validate(body)
        if isinstance(body, dict) and isinstance(body.get('patient'), dict):
            return PatientRecord.model_validate(body['patient'])
        return None
