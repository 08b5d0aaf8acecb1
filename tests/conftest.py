import math
from datetime import date
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from clinic_desk.clients.base import get_clinic_client
from clinic_desk.clients.clinic_api import ClinicApiClient, ClinicApiError, get_public_clinic_client
from clinic_desk.core.security import create_access_token
from clinic_desk.main import app
from clinic_desk.repository.repo_prescription_draft import PrescriptionDraftRepository
from clinic_desk.schemas.sche_user import ClinicUser


def make_medicines() -> List[Dict[str, Any]]:
    return [
        {'id': 1, 'name': 'Tab Panadol (1 pack = 200 tablets)', 'category': 'Analgesic',
         'quantity': 2, 'unit': 'packs', 'reorderLevel': 1, 'description': 'Paracetamol 500mg'},
        {'id': 2, 'name': 'Cough Syrup 100ml', 'category': 'Syrup',
         'quantity': 5, 'unit': 'bottles', 'reorderLevel': 10},
        {'id': 3, 'name': 'ORS Sachet (1 Jar = 50 sachets)', 'category': 'Rehydration',
         'quantity': 0.05, 'unit': 'jars', 'reorderLevel': 1},
        {'id': 4, 'name': 'Panadol (500mg)', 'category': 'Analgesic',
         'quantity': 0, 'unit': 'units', 'reorderLevel': 10},
    ]


def make_patients() -> List[Dict[str, Any]]:
    return [
        {'id': 1, 'name': 'Ali Khan', 'age': 34, 'gender': 'Male', 'contactNumber': '0300-1234567',
         'symptoms': 'Fever, cough', 'diagnosis': 'Viral fever', 'amountCharged': 500,
         'prescribedMedicines': [{'medicineId': 1, 'name': 'Tab Panadol (1 pack = 200 tablets)', 'quantity': 0.1, 'unit': 'packs'}],
         'doctorNotes': 'Rest for two days', 'visitDate': '2026-03-10T09:30:00Z', 'doctor': {'fullName': 'Dr. Sana Malik'}},
        {'id': 2, 'name': 'Ayesha Bibi', 'age': 61, 'gender': 'Female', 'contactNumber': '0311-7654321',
         'symptoms': 'Cough; sore throat', 'diagnosis': 'Pharyngitis', 'amountCharged': 300,
         'prescribedMedicines': [{'medicineId': 2, 'name': 'Cough Syrup 100ml', 'quantity': 1, 'unit': 'bottles'},
                                 {'medicineId': 1, 'name': 'Tab Panadol (1 pack = 200 tablets)', 'quantity': 0.05, 'unit': 'packs'}],
         'visitDate': '2026-03-31T18:45:00Z', 'doctor': {'fullName': 'Dr. Sana Malik'}},
        {'id': 3, 'name': 'Bilal Ahmed', 'age': 8, 'gender': 'Male',
         'symptoms': 'fever', 'amountCharged': 200,
         'prescribedMedicines': [],
         'visitDate': '2026-04-02T11:00:00Z', 'doctor': {'fullName': 'Dr. Imran Shah'}},
    ]


def make_expenses() -> List[Dict[str, Any]]:
    return [
        {'id': 1, 'expenseDate': '2026-03-05', 'description': 'Electricity bill', 'amount': '4500.50'},
        {'id': 2, 'expenseDate': '2026-03-20', 'description': 'Cleaning', 'amount': 1200},
        {'id': 3, 'expenseDate': '2026-04-01', 'description': 'Rent', 'amount': 20000},
    ]


class FakeClinicApiClient(ClinicApiClient):
    """In-memory stand-in for the clinic backend, speaking its camelCase JSON."""

    def __init__(self):
        super().__init__(base_url='http://clinic.test/api', token=None)
        self.medicines = make_medicines()
        self.patients = make_patients()
        self.expenses = make_expenses()
        self.users = {
            'doctor': ('secret', {'id': 7, 'username': 'doctor', 'fullName': 'Dr. Sana Malik', 'role': 'doctor'}),
            'admin': ('secret', {'id': 1, 'username': 'admin', 'fullName': 'Clinic Admin', 'role': 'admin'}),
            'reception': ('secret', {'id': 9, 'username': 'reception', 'fullName': 'Front Desk', 'role': 'receptionist'}),
        }
        self.calls: List[tuple] = []

    @staticmethod
    def _not_found(what: str):
        return ClinicApiError(http_code=404, message=f'{what} not found', upstream_status=404)

    def _find(self, items: List[Dict[str, Any]], item_id: int, what: str) -> Dict[str, Any]:
        for item in items:
            if item['id'] == item_id:
                return item
        raise self._not_found(what)

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append((method, path, params, json))
        parts = path.strip('/').split('/')
        resource = parts[0]
        item_id = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else None

        if resource == 'auth' and method == 'POST':
            known = self.users.get(json['username'])
            if not known or known[0] != json['password']:
                raise ClinicApiError(http_code=401, message='Invalid credentials', upstream_status=401)
            return {'token': f"upstream-{json['username']}", 'user': known[1]}

        if resource == 'medicines':
            return self._medicines(method, item_id, json)
        if resource == 'patients':
            return self._patients(method, params or {}, json)
        if resource == 'monthly-expenses':
            return self._expenses(method, item_id, params or {}, json)
        raise ClinicApiError(http_code=404, message=f'No route for {method} {path}', upstream_status=404)

    def _medicines(self, method, item_id, json):
        if method == 'GET':
            return [dict(m) for m in self.medicines]
        if method == 'POST':
            record = dict(json, id=max(m['id'] for m in self.medicines) + 1)
            self.medicines.append(record)
            return record
        medicine = self._find(self.medicines, item_id, 'Medicine')
        if method == 'PUT':
            medicine.update(json)
            return dict(medicine)
        self.medicines.remove(medicine)
        return {'message': 'Medicine deleted'}

    def _patients(self, method, params, json):
        if method == 'POST':
            for line in json['prescribedMedicines']:
                medicine = self._find(self.medicines, line['medicineId'], 'Medicine')
                medicine['quantity'] -= line['quantity']
            record = dict(json, id=len(self.patients) + 1, visitDate='2026-04-05T10:00:00Z')
            self.patients.insert(0, record)
            return {'message': 'Patient created', 'patient': record}

        page, limit = int(params.get('page', 1)), int(params.get('limit', 20))
        rows = self.patients
        if params.get('gender'):
            rows = [p for p in rows if p['gender'] == params['gender']]
        start = (page - 1) * limit
        return {
            'patients': rows[start:start + limit],
            'pagination': {'total': len(rows), 'pages': max(1, math.ceil(len(rows) / limit)), 'page': page, 'limit': limit},
        }

    def _expenses(self, method, item_id, params, json):
        if method == 'GET':
            start = date.fromisoformat(params['startDate'])
            end = date.fromisoformat(params['endDate'])
            return {'expenses': [
                e for e in self.expenses if start <= date.fromisoformat(e['expenseDate']) <= end
            ]}
        if method == 'POST':
            record = dict(json, id=max(e['id'] for e in self.expenses) + 1)
            self.expenses.append(record)
            return record
        expense = self._find(self.expenses, item_id, 'Expense')
        if method == 'PUT':
            expense.update(json)
            return dict(expense)
        self.expenses.remove(expense)
        return None


@pytest.fixture
def clinic_backend():
    return FakeClinicApiClient()


@pytest.fixture
def client(clinic_backend):
    app.dependency_overrides[get_clinic_client] = lambda: clinic_backend
    app.dependency_overrides[get_public_clinic_client] = lambda: clinic_backend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_drafts():
    PrescriptionDraftRepository.clear()
    yield
    PrescriptionDraftRepository.clear()


def _auth_headers(user_id: str, username: str, role: str) -> Dict[str, str]:
    user = ClinicUser(id=user_id, username=username, full_name=username.title(), role=role)
    token = create_access_token(user, upstream_token=f'upstream-{username}')
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def doctor_headers():
    return _auth_headers('7', 'doctor', 'doctor')


@pytest.fixture
def other_doctor_headers():
    return _auth_headers('8', 'locum', 'doctor')


@pytest.fixture
def admin_headers():
    return _auth_headers('1', 'admin', 'admin')
