from typing import List, Optional

from fastapi import Depends

from clinic_desk.clients.base import get_clinic_client
from clinic_desk.clients.clinic_api import ClinicApiClient, ClinicApiError
from clinic_desk.schemas.sche_medicine import MedicineCreateRequest, MedicineRecord, MedicineUpdateRequest


class MedicineRepository:
    def __init__(self, client: ClinicApiClient = Depends(get_clinic_client)):
        self.client = client

    def get_all(self) -> List[MedicineRecord]:
        return [MedicineRecord.model_validate(item) for item in self.client.get('/medicines') or []]

    def get_by_id(self, medicine_id: int) -> Optional[MedicineRecord]:
        # The backend has no single-medicine read, the catalog is small enough to scan
        for medicine in self.get_all():
            if medicine.id == medicine_id:
                return medicine
        return None

    def create(self, medicine_data: MedicineCreateRequest) -> MedicineRecord:
        return MedicineRecord.model_validate(self.client.post('/medicines', json=medicine_data.to_clinic()))

    def update(self, medicine_id: int, medicine_data: MedicineUpdateRequest) -> MedicineRecord:
        return MedicineRecord.model_validate(self.client.put(f'/medicines/{medicine_id}', json=medicine_data.to_clinic()))

    def delete(self, medicine_id: int) -> bool:
        try:
            self.client.delete(f'/medicines/{medicine_id}')
        except ClinicApiError as e:
            if e.upstream_status == 404:
                return False
            raise
        return True
