"""
Reports over the patient list.

The backend returns raw visits; filtering, statistics and the CSV export are
computed here so the admin report page and its download always agree.
"""
import csv
import io
import logging
import re
from collections import Counter
from datetime import date
from typing import Iterable, List, Optional

from fastapi import Depends

from clinic_desk.core.config import settings
from clinic_desk.helpers.periods import period_bounds
from clinic_desk.repository.repo_expense import ExpenseRepository
from clinic_desk.repository.repo_patient import PatientRepository
from clinic_desk.schemas.sche_patient import PatientRecord
from clinic_desk.schemas.sche_report import (
    CountItem,
    FinancialSummary,
    PatientReportFilter,
    PatientReportResponse,
    PatientStatistics,
)

logger = logging.getLogger(__name__)

AGE_GROUPS = [
    ('0-18', 0, 18),
    ('19-35', 19, 35),
    ('36-50', 36, 50),
    ('51-65', 51, 65),
    ('65+', 66, None),
]
TOP_N = 10
SYMPTOM_SEPARATOR = re.compile(r'[,;]+')
REPORT_CSV_HEADER = ['Name', 'Age', 'Gender', 'Contact', 'Symptoms', 'Diagnosis', 'Medicines', 'Doctor', 'Visit Date']


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term.lower() in value.lower()


def _visit_day(patient: PatientRecord) -> Optional[date]:
    return patient.visit_date.date() if patient.visit_date else None


def filter_patients(patients: Iterable[PatientRecord], filters: PatientReportFilter) -> List[PatientRecord]:
    result = list(patients)

    if filters.name:
        result = [p for p in result if _contains(p.name, filters.name)]
    if filters.age_min is not None:
        result = [p for p in result if p.age >= filters.age_min]
    if filters.age_max is not None:
        result = [p for p in result if p.age <= filters.age_max]
    if filters.gender:
        result = [p for p in result if p.gender == filters.gender.value]
    if filters.contact_number:
        result = [p for p in result if p.contact_number and filters.contact_number in p.contact_number]
    if filters.symptoms:
        result = [p for p in result if _contains(p.symptoms, filters.symptoms)]
    if filters.diagnosis:
        result = [p for p in result if _contains(p.diagnosis, filters.diagnosis)]
    if filters.prescribed_medicine:
        result = [
            p for p in result
            if any(_contains(med.name, filters.prescribed_medicine) for med in p.prescribed_medicines or [])
        ]
    if filters.doctor_notes:
        result = [p for p in result if _contains(p.doctor_notes, filters.doctor_notes)]
    # Date bounds are inclusive calendar days
    if filters.start_date:
        result = [p for p in result if _visit_day(p) and _visit_day(p) >= filters.start_date]
    if filters.end_date:
        result = [p for p in result if _visit_day(p) and _visit_day(p) <= filters.end_date]
    if filters.doctor_name:
        result = [p for p in result if p.doctor and _contains(p.doctor.full_name, filters.doctor_name)]

    return result


def _in_age_group(age: int, low: int, high: Optional[int]) -> bool:
    return age >= low and (high is None or age <= high)


def generate_statistics(patients: List[PatientRecord]) -> PatientStatistics:
    total = len(patients)
    avg_age = round(sum(p.age for p in patients) / total, 1) if total else 0

    medicine_count = Counter(
        med.name for p in patients for med in p.prescribed_medicines or [] if med.name
    )
    symptom_count = Counter()
    for patient in patients:
        if not patient.symptoms:
            continue
        for symptom in SYMPTOM_SEPARATOR.split(patient.symptoms.lower()):
            symptom = symptom.strip()
            if symptom:
                symptom_count[symptom] += 1

    return PatientStatistics(
        total=total,
        male=sum(1 for p in patients if p.gender == 'Male'),
        female=sum(1 for p in patients if p.gender == 'Female'),
        other=sum(1 for p in patients if p.gender == 'Other'),
        avg_age=avg_age,
        age_groups={
            label: sum(1 for p in patients if _in_age_group(p.age, low, high))
            for label, low, high in AGE_GROUPS
        },
        top_medicines=[CountItem(name=name, count=count) for name, count in medicine_count.most_common(TOP_N)],
        common_symptoms=[CountItem(name=name, count=count) for name, count in symptom_count.most_common(TOP_N)],
        total_revenue=round(sum(p.amount_charged or 0 for p in patients), 2),
    )


def patients_to_csv(patients: List[PatientRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(REPORT_CSV_HEADER)
    for p in patients:
        medicines = '; '.join(med.name for med in p.prescribed_medicines if med.name) if p.prescribed_medicines else ''
        writer.writerow([
            p.name,
            p.age,
            p.gender or 'N/A',
            p.contact_number or 'N/A',
            p.symptoms or 'N/A',
            p.diagnosis or 'N/A',
            medicines or 'N/A',
            p.doctor.full_name if p.doctor and p.doctor.full_name else 'N/A',
            p.visit_date.date().isoformat() if p.visit_date else 'N/A',
        ])
    return buffer.getvalue()


class ReportService:
    def __init__(self, patient_repo: PatientRepository = Depends(), expense_repo: ExpenseRepository = Depends()):
        self.patient_repo = patient_repo
        self.expense_repo = expense_repo

    def _filtered_patients(self, filters: PatientReportFilter) -> List[PatientRecord]:
        patients = self.patient_repo.get_all(limit=settings.PATIENT_REPORT_LIMIT)
        if len(patients) >= settings.PATIENT_REPORT_LIMIT:
            logger.warning(f"Patient report hit the limit of {settings.PATIENT_REPORT_LIMIT} records, older visits are left out")
        return filter_patients(patients, filters)

    def patient_report(self, filters: PatientReportFilter) -> PatientReportResponse:
        patients = self._filtered_patients(filters)
        return PatientReportResponse(statistics=generate_statistics(patients), patients=patients)

    def patient_report_csv(self, filters: PatientReportFilter) -> str:
        return patients_to_csv(self._filtered_patients(filters))

    def financial_summary(self, year: Optional[int] = None, month: Optional[int] = None) -> FinancialSummary:
        start_date, end_date = period_bounds(year, month)
        patients, _ = self.patient_repo.get_page(
            page=1,
            limit=settings.PATIENT_REPORT_LIMIT,
            startDate=start_date.isoformat(),
            endDate=end_date.isoformat(),
        )
        patients = filter_patients(patients, PatientReportFilter(start_date=start_date, end_date=end_date))
        expenses = self.expense_repo.get_between(start_date, end_date)

        revenue = round(sum(p.amount_charged or 0 for p in patients), 2)
        spent = round(sum(e.amount for e in expenses), 2)
        return FinancialSummary(
            start_date=start_date,
            end_date=end_date,
            patient_count=len(patients),
            revenue=revenue,
            expense_count=len(expenses),
            expenses=spent,
            net=round(revenue - spent, 2),
        )
