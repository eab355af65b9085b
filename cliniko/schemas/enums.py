from enum import Enum, IntEnum


class CancellationReason(IntEnum):
    FEELING_BETTER = 10
    CONDITION_WORSE = 20
    SICK = 30
    COVID19_RELATED = 31
    AWAY = 40
    OTHER = 50
    WORK = 60


class PhoneType(str, Enum):
    MOBILE = "Mobile"
    HOME = "Home"
    WORK = "Work"
    OTHER = "Other"
    FAX = "Fax"


class StockAdjustmentType(str, Enum):
    STOCK_PURCHASE = "Stock Purchase"
    RETURNED = "Returned"
    OTHER = "Other"
    DAMAGED = "Damaged"
    OUT_OF_DATE = "Out of Date"
    ITEM_SOLD = "Item Sold"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
