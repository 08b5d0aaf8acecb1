from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from clinic_desk.helpers.enums import StockStatus
from clinic_desk.schemas.sche_base import ClinicPayload, ClinicRecord


class MedicineRecord(ClinicRecord):
    id: int
    name: str
    category: Optional[str] = ''
    quantity: float = 0
    unit: str = 'units'
    reorder_level: float = 10
    description: Optional[str] = None
    # Structured packaging, when the backend stores it
    pack_size: Optional[int] = None
    pack_unit: Optional[str] = None


class MedicineCreateRequest(ClinicPayload):
    name: str = Field(..., min_length=1)
    category: str = ''
    quantity: float = Field(0, ge=0)
    unit: str = 'units'
    reorder_level: float = Field(10, ge=0)
    description: Optional[str] = ''
    pack_size: Optional[int] = Field(None, gt=0)
    pack_unit: Optional[str] = None


class MedicineUpdateRequest(MedicineCreateRequest):
    pass


class MedicineResponse(BaseModel):
    id: int
    name: str
    base_name: str
    category: Optional[str] = ''
    quantity: float
    unit: str
    reorder_level: float
    description: Optional[str] = None
    has_pack_info: bool
    pack_size: Optional[int] = None
    pack_unit: Optional[str] = None
    total_units: Optional[float] = None
    stock_status: StockStatus
    stock_display: str
    option_label: str


class PackInfoRequest(BaseModel):
    name: str = Field(..., min_length=1)


class PackInfoResponse(BaseModel):
    base_name: str
    has_pack_info: bool
    pack_size: Optional[int] = None
    pack_unit: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
