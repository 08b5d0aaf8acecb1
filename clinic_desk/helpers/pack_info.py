"""
Pack/unit helpers for medicine names.

Inventory is tracked in storage units ("packs", "jars", "bottles") while doctors
dispense tablets, sachets or capsules. Packaged medicines declare the ratio in
their display name, e.g. ``"Tab Panadol (1 pack = 200 tablets)"``.
"""
import re
from dataclasses import dataclass, replace
from typing import Any, Optional

PACK_NAME_PATTERN = re.compile(
    r'(.+?)\s*\(1 (?:pack|jar) = (\d+)\s+(\w+)\)',
    re.IGNORECASE | re.ASCII,
)

DEFAULT_PACK_SIZE = 1
DEFAULT_PACK_UNIT = 'unit'

# Float noise below this is ignored when comparing or formatting quantities
QUANTITY_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PackInfo:
    base_name: str
    has_pack_info: bool
    pack_size: Optional[int] = None
    pack_unit: Optional[str] = None

    def with_defaults(self) -> "PackInfo":
        """Return a copy with pack_size=1 / pack_unit='unit' filled in where absent."""
        return replace(
            self,
            pack_size=DEFAULT_PACK_SIZE if self.pack_size is None else self.pack_size,
            pack_unit=DEFAULT_PACK_UNIT if self.pack_unit is None else self.pack_unit,
        )


def parse_pack_info(name: str) -> PackInfo:
    match = PACK_NAME_PATTERN.fullmatch(name)
    if not match:
        return PackInfo(base_name=name, has_pack_info=False)

    return PackInfo(
        base_name=match.group(1).strip(),
        has_pack_info=True,
        pack_size=int(match.group(2)),
        pack_unit=match.group(3),
    )


def resolve_pack_info(medicine: Any) -> PackInfo:
    """
    Pack info for a medicine record.

    Records that already carry structured ``pack_size``/``pack_unit`` fields are
    used as-is; legacy records fall back to parsing the name.
    """
    parsed = parse_pack_info(medicine.name)
    pack_size = getattr(medicine, 'pack_size', None)
    if pack_size is None:
        return parsed

    pack_unit = getattr(medicine, 'pack_unit', None) or parsed.pack_unit or DEFAULT_PACK_UNIT
    return PackInfo(
        base_name=parsed.base_name,
        has_pack_info=True,
        pack_size=int(pack_size),
        pack_unit=pack_unit,
    )


def compose_medicine_name(base_name: str, pack_size: int, pack_unit: str, container: str = 'pack') -> str:
    return f"{base_name} (1 {container} = {pack_size} {pack_unit})"


def _require_pack_size(pack_info: PackInfo) -> int:
    if pack_info.pack_size is None:
        raise ValueError(f"'{pack_info.base_name}' has no pack information")
    return pack_info.pack_size


def to_dispensing_units(pack_info: PackInfo, quantity_in_packs: float) -> float:
    return quantity_in_packs * _require_pack_size(pack_info)


def to_storage_units(pack_info: PackInfo, quantity_in_units: float) -> float:
    pack_size = _require_pack_size(pack_info)
    if pack_size == 0:
        raise ZeroDivisionError(f"Pack size of '{pack_info.base_name}' is zero")
    return quantity_in_units / pack_size


def is_whole(quantity: float) -> bool:
    return abs(quantity - round(quantity)) < QUANTITY_TOLERANCE


def format_unit_quantity(quantity: float) -> str:
    if is_whole(quantity):
        return str(int(round(quantity)))
    return f"{quantity:.1f}"


def format_pack_quantity(quantity: float) -> str:
    if is_whole(quantity):
        return str(int(round(quantity)))
    return f"{quantity:.2f}"
