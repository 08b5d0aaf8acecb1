import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.login_manager import staff
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_expense import ExpenseListResponse, ExpensePeriodParams, ExpenseRecord, ExpenseRequest
from clinic_desk.services.srv_expense import ExpenseService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", dependencies=[Depends(staff)], response_model=DataResponse[ExpenseListResponse])
def get_expenses(
    period: Annotated[ExpensePeriodParams, Query()],
    expense_service: ExpenseService = Depends()
) -> Any:
    """
    Expenses of one calendar month, or of the whole year when `month` is empty.
    """
    try:
        expenses = expense_service.get_expenses(year=period.year, month=period.month)
        logger.info(f"get_expenses success: {len(expenses.expenses)} expenses between {expenses.start_date} and {expenses.end_date}")
        return DataResponse().success_response(data=expenses)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_expenses error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.post("", dependencies=[Depends(staff)], response_model=DataResponse[ExpenseRecord])
def create_expense(expense_data: ExpenseRequest, expense_service: ExpenseService = Depends()) -> Any:
    try:
        return DataResponse().success_response(data=expense_service.create_expense(expense_data))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_expense error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.put("/{expense_id}", dependencies=[Depends(staff)], response_model=DataResponse[ExpenseRecord])
def update_expense(expense_id: int, expense_data: ExpenseRequest, expense_service: ExpenseService = Depends()) -> Any:
    try:
        return DataResponse().success_response(data=expense_service.update_expense(expense_id, expense_data))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_expense error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.delete("/{expense_id}", dependencies=[Depends(staff)], response_model=DataResponse[bool])
def delete_expense(expense_id: int, expense_service: ExpenseService = Depends()) -> Any:
    if not expense_service.delete_expense(expense_id):
        raise CustomException(http_code=404, code='404', message="Expense not found")
    return DataResponse().success_response(data=True)
