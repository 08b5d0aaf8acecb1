import csv
import io
import logging
from typing import List, Optional

from fastapi import Depends

from clinic_desk.helpers.enums import StockStatus
from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.helpers.pack_info import (
    compose_medicine_name,
    format_pack_quantity,
    format_unit_quantity,
    parse_pack_info,
    resolve_pack_info,
    to_dispensing_units,
)
from clinic_desk.helpers.prescribing import describe_stock
from clinic_desk.repository.repo_medicine import MedicineRepository
from clinic_desk.schemas.sche_medicine import (
    MedicineCreateRequest,
    MedicineRecord,
    MedicineResponse,
    MedicineUpdateRequest,
    PackInfoResponse,
)

logger = logging.getLogger(__name__)

INVENTORY_CSV_HEADER = [
    'Medicine', 'Pack Size', 'Pack Unit', 'Category', 'Stock', 'Unit', 'Total Units', 'Reorder Level', 'Status',
]


def stock_status(medicine: MedicineRecord) -> StockStatus:
    if medicine.quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if medicine.quantity <= medicine.reorder_level:
        return StockStatus.LOW_STOCK
    return StockStatus.AVAILABLE


def to_medicine_response(medicine: MedicineRecord) -> MedicineResponse:
    pack_info = resolve_pack_info(medicine)
    total_units = to_dispensing_units(pack_info, medicine.quantity) if pack_info.has_pack_info else None
    status = stock_status(medicine)

    option_label = f"{pack_info.base_name} - Stock: {format_pack_quantity(medicine.quantity)} {medicine.unit}"
    if pack_info.has_pack_info:
        option_label += f" ({pack_info.pack_size} {pack_info.pack_unit}/pack)"
    if status == StockStatus.OUT_OF_STOCK:
        option_label += ' (OUT OF STOCK)'

    return MedicineResponse(
        id=medicine.id,
        name=medicine.name,
        base_name=pack_info.base_name,
        category=medicine.category,
        quantity=medicine.quantity,
        unit=medicine.unit,
        reorder_level=medicine.reorder_level,
        description=medicine.description,
        has_pack_info=pack_info.has_pack_info,
        pack_size=pack_info.pack_size,
        pack_unit=pack_info.pack_unit,
        total_units=total_units,
        stock_status=status,
        stock_display=describe_stock(medicine),
        option_label=option_label,
    )


class MedicineService:
    def __init__(self, medicine_repo: MedicineRepository = Depends()):
        self.medicine_repo = medicine_repo

    def get_all_medicines(self, search: Optional[str] = None) -> List[MedicineResponse]:
        medicines = self.medicine_repo.get_all()
        if search:
            term = search.lower()
            medicines = [
                m for m in medicines
                if term in m.name.lower() or term in (m.category or '').lower()
            ]
        return [to_medicine_response(m) for m in medicines]

    def get_low_stock_medicines(self) -> List[MedicineResponse]:
        return [
            to_medicine_response(m) for m in self.medicine_repo.get_all()
            if stock_status(m) != StockStatus.AVAILABLE
        ]

    def get_medicine(self, medicine_id: int) -> MedicineRecord:
        medicine = self.medicine_repo.get_by_id(medicine_id)
        if not medicine:
            raise CustomException(http_code=404, code='404', message='Medicine not found')
        return medicine

    @staticmethod
    def _with_pack_name(medicine_data: MedicineCreateRequest) -> MedicineCreateRequest:
        """Keep the pack suffix in the name for clients that still read it from there."""
        if medicine_data.pack_size is None:
            return medicine_data
        if not medicine_data.pack_unit:
            raise CustomException(http_code=400, code='400', message='Pack unit is required when pack size is given')

        parsed = parse_pack_info(medicine_data.name)
        if parsed.has_pack_info:
            if parsed.pack_size != medicine_data.pack_size or parsed.pack_unit != medicine_data.pack_unit:
                raise CustomException(http_code=400, code='400', message='Pack size in the name does not match the pack fields')
            return medicine_data

        name = compose_medicine_name(medicine_data.name.strip(), medicine_data.pack_size, medicine_data.pack_unit)
        return medicine_data.model_copy(update={'name': name})

    def create_medicine(self, medicine_data: MedicineCreateRequest) -> MedicineResponse:
        medicine = self.medicine_repo.create(self._with_pack_name(medicine_data))
        logger.info(f"Medicine created: id={medicine.id} name={medicine.name}")
        return to_medicine_response(medicine)

    def update_medicine(self, medicine_id: int, medicine_data: MedicineUpdateRequest) -> MedicineResponse:
        medicine = self.medicine_repo.update(medicine_id, self._with_pack_name(medicine_data))
        logger.info(f"Medicine updated: id={medicine.id}")
        return to_medicine_response(medicine)

    def delete_medicine(self, medicine_id: int) -> bool:
        return self.medicine_repo.delete(medicine_id)

    @staticmethod
    def parse_name(name: str) -> PackInfoResponse:
        return PackInfoResponse.model_validate(parse_pack_info(name))

    def export_inventory_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(INVENTORY_CSV_HEADER)
        for medicine in self.get_all_medicines():
            writer.writerow([
                medicine.base_name,
                medicine.pack_size if medicine.has_pack_info else '',
                medicine.pack_unit or '',
                medicine.category or '',
                format_pack_quantity(medicine.quantity),
                medicine.unit,
                format_unit_quantity(medicine.total_units) if medicine.total_units is not None else '',
                format_pack_quantity(medicine.reorder_level),
                medicine.stock_status.value,
            ])
        return buffer.getvalue()
