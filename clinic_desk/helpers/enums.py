import enum


class UserRole(enum.Enum):
    ADMIN = 'admin'
    DOCTOR = 'doctor'

class Gender(enum.Enum):
    MALE = 'Male'
    FEMALE = 'Female'
    OTHER = 'Other'

class PrescriptionMode(enum.Enum):
    UNITS = 'units'
    PACKS = 'packs'

class StockStatus(enum.Enum):
    AVAILABLE = 'available'
    LOW_STOCK = 'low_stock'
    OUT_OF_STOCK = 'out_of_stock'
