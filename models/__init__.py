from .enums import (
    ChoiceEnum,
    Gender,
    InvalidChoiceError,
    InventoryCategory,
    LedgerColumn,
    PatientStatus,
    Severity,
    TransactionType,
)
from .patient import Patient
from .inventory import InventoryItem
from .transaction import FinancialTransaction

__all__ = [
    "ChoiceEnum",
    "Gender",
    "InvalidChoiceError",
    "InventoryCategory",
    "LedgerColumn",
    "PatientStatus",
    "Severity",
    "TransactionType",
    "Patient",
    "InventoryItem",
    "FinancialTransaction",
]
