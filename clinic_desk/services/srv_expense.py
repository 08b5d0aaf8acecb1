import logging
from typing import Optional

from fastapi import Depends

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.periods import period_bounds
from clinic_desk.repository.repo_expense import ExpenseRepository
from clinic_desk.schemas.sche_expense import ExpenseListResponse, ExpenseRecord, ExpenseRequest

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, expense_repo: ExpenseRepository = Depends()):
        self.expense_repo = expense_repo

    def get_expenses(self, year: Optional[int] = None, month: Optional[int] = None) -> ExpenseListResponse:
        start_date, end_date = period_bounds(year, month)
        expenses = self.expense_repo.get_between(start_date, end_date)
        total = round(sum(expense.amount for expense in expenses), 2)
        return ExpenseListResponse(
            start_date=start_date,
            end_date=end_date,
            expenses=expenses,
            total=total,
            total_display=f"Rs. {total:.2f}",
        )

    @staticmethod
    def _validate(expense_data: ExpenseRequest):
        if expense_data.amount <= 0:
            raise CustomException(http_code=400, code='400', message='Amount must be greater than 0')

    def create_expense(self, expense_data: ExpenseRequest) -> ExpenseRecord:
        self._validate(expense_data)
        expense = self.expense_repo.create(expense_data)
        logger.info(f"Expense added: id={expense.id} amount={expense.amount}")
        return expense

    def update_expense(self, expense_id: int, expense_data: ExpenseRequest) -> ExpenseRecord:
        self._validate(expense_data)
        return self.expense_repo.update(expense_id, expense_data)

    def delete_expense(self, expense_id: int) -> bool:
        return self.expense_repo.delete(expense_id)
