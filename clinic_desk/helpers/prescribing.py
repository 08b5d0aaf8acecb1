"""
Rules applied while a doctor builds the prescription list of a visit.

A line is quoted from a medicine record and an entered quantity, checked against
the stock on hand and against the lines already on the list, then appended. The
list itself belongs to the caller; nothing here keeps state.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from clinic_desk.helpers.enums import PrescriptionMode
from clinic_desk.helpers.pack_info import (
    QUANTITY_TOLERANCE,
    format_pack_quantity,
    format_unit_quantity,
    resolve_pack_info,
    to_dispensing_units,
    to_storage_units,
)

logger = logging.getLogger(__name__)


class PrescriptionError(Exception):
    """A prescription line was refused. The message is meant for the doctor."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientStockError(PrescriptionError):
    pass


class DuplicateMedicineError(PrescriptionError):
    pass


class InvalidPackSizeError(PrescriptionError):
    pass


class LineNotFoundError(PrescriptionError):
    pass


@dataclass
class PrescriptionLine:
    medicine_id: int
    name: str
    base_name: str
    prescription_mode: PrescriptionMode
    quantity: float
    unit: str
    quantity_in_units: float
    dispensing_unit: str
    pack_size: Optional[int] = None

    @property
    def has_pack_info(self) -> bool:
        return self.pack_size is not None

    @property
    def dosage(self) -> str:
        units = f"{format_unit_quantity(self.quantity_in_units)} {self.dispensing_unit}"
        if not self.has_pack_info:
            return f"{format_pack_quantity(self.quantity)} {self.unit}"
        if self.prescription_mode == PrescriptionMode.PACKS:
            return f"{format_pack_quantity(self.quantity)} {self.unit} ({units})"
        return units


def quote_line(medicine: Any, quantity: float, mode: PrescriptionMode) -> PrescriptionLine:
    """
    Convert an entered quantity into both denominations.

    ``quantity`` is in dispensing units when ``mode`` is UNITS and in storage
    units when it is PACKS. Plain medicines have a single denomination, so the
    mode does not change anything for them.
    """
    pack_info = resolve_pack_info(medicine)

    if not pack_info.has_pack_info:
        return PrescriptionLine(
            medicine_id=medicine.id,
            name=medicine.name,
            base_name=pack_info.base_name,
            prescription_mode=mode,
            quantity=quantity,
            unit=medicine.unit,
            quantity_in_units=quantity,
            dispensing_unit=medicine.unit,
        )

    if mode == PrescriptionMode.UNITS:
        try:
            quantity_in_packs = to_storage_units(pack_info, quantity)
        except ZeroDivisionError:
            raise InvalidPackSizeError(
                f"Pack size of {pack_info.base_name} is zero. Fix the medicine before prescribing it in {pack_info.pack_unit}."
            )
        quantity_in_units = quantity
    else:
        quantity_in_packs = quantity
        quantity_in_units = to_dispensing_units(pack_info, quantity)

    return PrescriptionLine(
        medicine_id=medicine.id,
        name=medicine.name,
        base_name=pack_info.base_name,
        prescription_mode=mode,
        quantity=quantity_in_packs,
        unit=medicine.unit,
        quantity_in_units=quantity_in_units,
        dispensing_unit=pack_info.pack_unit,
        pack_size=pack_info.pack_size,
    )


def describe_stock(medicine: Any) -> str:
    """Stock on hand, with the dispensing-unit total for packaged medicines."""
    pack_info = resolve_pack_info(medicine)
    packs = f"{format_pack_quantity(medicine.quantity)} {medicine.unit}"
    if not pack_info.has_pack_info:
        return packs
    units = to_dispensing_units(pack_info, medicine.quantity)
    return f"{format_unit_quantity(units)} {pack_info.pack_unit} ({packs})"


def check_stock(medicine: Any, line: PrescriptionLine) -> None:
    if line.quantity - medicine.quantity > QUANTITY_TOLERANCE:
        raise InsufficientStockError(f"Insufficient stock! Only {describe_stock(medicine)} available.")


def add_line(lines: List[PrescriptionLine], line: PrescriptionLine) -> PrescriptionLine:
    if any(existing.medicine_id == line.medicine_id for existing in lines):
        raise DuplicateMedicineError('This medicine is already added. Remove it first to change quantity.')
    lines.append(line)
    return line


def prescribe(lines: List[PrescriptionLine], medicine: Any, quantity: float, mode: PrescriptionMode) -> PrescriptionLine:
    line = quote_line(medicine, quantity, mode)
    check_stock(medicine, line)
    add_line(lines, line)
    logger.debug(f"Prescribed {line.dosage} of {line.base_name} (deducts {line.quantity} {line.unit})")
    return line


def remove_line(lines: List[PrescriptionLine], medicine_id: int) -> PrescriptionLine:
    for index, line in enumerate(lines):
        if line.medicine_id == medicine_id:
            return lines.pop(index)
    raise LineNotFoundError('This medicine is not on the prescription.')
