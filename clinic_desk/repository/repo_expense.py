from datetime import date
from typing import List

from fastapi import Depends

from clinic_desk.clients.base import get_clinic_client
from clinic_desk.clients.clinic_api import ClinicApiClient, ClinicApiError
from clinic_desk.schemas.sche_expense import ExpenseRecord, ExpenseRequest


class ExpenseRepository:
    def __init__(self, client: ClinicApiClient = Depends(get_clinic_client)):
        self.client = client

    def get_between(self, start_date: date, end_date: date) -> List[ExpenseRecord]:
        body = self.client.get('/monthly-expenses', params={
            'startDate': start_date.isoformat(),
            'endDate': end_date.isoformat(),
        }) or {}
        return [ExpenseRecord.model_validate(item) for item in body.get('expenses') or []]

    def create(self, expense_data: ExpenseRequest) -> ExpenseRecord:
        return ExpenseRecord.model_validate(self.client.post('/monthly-expenses', json=expense_data.to_clinic()))

    def update(self, expense_id: int, expense_data: ExpenseRequest) -> ExpenseRecord:
        return ExpenseRecord.model_validate(self.client.put(f'/monthly-expenses/{expense_id}', json=expense_data.to_clinic()))

    def delete(self, expense_id: int) -> bool:
        try:
            self.client.delete(f'/monthly-expenses/{expense_id}')
        except ClinicApiError as e:
            if e.upstream_status == 404:
                return False
            raise
        return True
