import enum


class UserRole(str, enum.Enum):
    BUYER = "buyer"
    VENDOR = "vendor"
    ADMIN = "admin"


class ResourceCategory(str, enum.Enum):
    MATERIAL = "Material"
    EQUIPMENT = "Equipment"
    LABOR = "Labor"
    SUBCONTRACTOR = "Subcontractor"
    OTHER = "Other"


class ResourceUnit(str, enum.Enum):
    EACH = "Each"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    SQUARE_FOOT = "Square Foot"
    CUBIC_YARD = "Cubic Yard"
    TON = "Ton"


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"
