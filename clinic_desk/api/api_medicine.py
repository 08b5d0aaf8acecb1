from datetime import date
from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends
from starlette.responses import Response

from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.login_manager import admin_only, staff
from clinic_desk.helpers.paging import Page, PaginationParams, paginate
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_medicine import (
    MedicineCreateRequest,
    MedicineResponse,
    MedicineUpdateRequest,
    PackInfoRequest,
    PackInfoResponse,
)
from clinic_desk.services.srv_medicine import MedicineService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get('', dependencies=[Depends(staff)], response_model=Page[MedicineResponse])
def get_all_medicines(
    search: Optional[str] = None,
    params: PaginationParams = Depends(),
    medicine_service: MedicineService = Depends()
) -> Any:
    """
    Retrieve the medicine catalog.

    Each item carries its pack information (parsed from the name or taken from the
    structured fields), the stock on hand in both denominations, the stock status
    and the label used by the prescribing form's medicine picker.

    **Authorization**: admin or doctor.

    **Query**: `search` matches the name or the category, case-insensitively.
    """
    try:
        logger.info(f"get_all_medicines request: search={search}")
        medicines = medicine_service.get_all_medicines(search=search)
        logger.info(f"get_all_medicines success: {len(medicines)} medicines retrieved")
        return paginate(medicines, params)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_all_medicines error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.get('/low-stock', dependencies=[Depends(staff)], response_model=DataResponse[List[MedicineResponse]])
def get_low_stock_medicines(medicine_service: MedicineService = Depends()) -> Any:
    """
    Medicines at or below their reorder level, including those out of stock.
    """
    try:
        medicines = medicine_service.get_low_stock_medicines()
        logger.info(f"get_low_stock_medicines success: {len(medicines)} medicines")
        return DataResponse().success_response(data=medicines)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_low_stock_medicines error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.get('/export', dependencies=[Depends(admin_only)])
def export_inventory(medicine_service: MedicineService = Depends()) -> Any:
    """
    Download the inventory as CSV, with pack sizes split out of the names.
    """
    try:
        content = medicine_service.export_inventory_csv()
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"export_inventory error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

    filename = f"inventory-{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@router.post('/pack-info', dependencies=[Depends(staff)], response_model=DataResponse[PackInfoResponse])
def parse_pack_info(data: PackInfoRequest) -> Any:
    """
    Parse a medicine name such as `Tab Panadol (1 pack = 200 tablets)`.

    Names without the `(1 pack = N unit)` / `(1 jar = N unit)` suffix come back
    unchanged with `has_pack_info = false`.
    """
    return DataResponse().success_response(data=MedicineService.parse_name(data.name))


@router.post('', dependencies=[Depends(admin_only)], response_model=DataResponse[MedicineResponse])
def create_medicine(
    medicine_data: MedicineCreateRequest,
    medicine_service: MedicineService = Depends()
) -> Any:
    """
    Add a medicine to the inventory.

    When `pack_size` and `pack_unit` are given and the name has no pack suffix,
    the suffix is appended to the name as well.

    **Authorization**: admin.
    """
    try:
        logger.info(f"create_medicine request: {medicine_data.name}")
        medicine = medicine_service.create_medicine(medicine_data)
        logger.info(f"create_medicine success: medicine_id={medicine.id}")
        return DataResponse().success_response(data=medicine)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_medicine error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.put('/{medicine_id}', dependencies=[Depends(admin_only)], response_model=DataResponse[MedicineResponse])
def update_medicine(
    medicine_id: int,
    medicine_data: MedicineUpdateRequest,
    medicine_service: MedicineService = Depends()
) -> Any:
    try:
        logger.info(f"update_medicine request: medicine_id={medicine_id}")
        medicine = medicine_service.update_medicine(medicine_id, medicine_data)
        return DataResponse().success_response(data=medicine)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_medicine error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.delete('/{medicine_id}', dependencies=[Depends(admin_only)], response_model=DataResponse[bool])
def delete_medicine(
    medicine_id: int,
    medicine_service: MedicineService = Depends()
) -> Any:
    """
    Delete a medicine from the inventory.

    **Authorization**: admin.
    """
    try:
        logger.info(f"delete_medicine request: medicine_id={medicine_id}")
        success = medicine_service.delete_medicine(medicine_id)
        if success:
            logger.info(f"delete_medicine success: medicine_id={medicine_id}")
            return DataResponse().success_response(data=True)
        else:
            logger.warning(f"delete_medicine not found: medicine_id={medicine_id}")
            raise CustomException(http_code=404, code='404', message="Medicine not found")
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_medicine error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))
