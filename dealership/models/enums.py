from enum import Enum


class Role(str, Enum):
    user = "user"
    admin = "admin"


class CarStatus(str, Enum):
    available = "available"
    sold = "sold"
    upcoming = "upcoming"


class FuelType(str, Enum):
    petrol = "Petrol"
    diesel = "Diesel"
    electric = "Electric"
    cng = "CNG"
    hybrid = "Hybrid"


class Transmission(str, Enum):
    manual = "Manual"
    automatic = "Automatic"


class InquiryStatus(str, Enum):
    pending = "pending"
    contacted = "contacted"
    closed = "closed"
