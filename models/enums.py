# models/enums.py

import enum


class InvalidChoiceError(ValueError):
    """Raised when a value is not one of an enumeration's allowed members."""

    def __init__(self, field: str, value, allowed):
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid {field}: {value!r}. Expected one of: {', '.join(self.allowed)}."
        )


class ChoiceEnum(str, enum.Enum):
    """String enum with a strict parser used by model validators."""

    @classmethod
    def parse(cls, value, field: str | None = None):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidChoiceError(field or cls.__name__, value, cls.values())

    @classmethod
    def values(cls):
        return [m.value for m in cls]

    def __str__(self):
        return self.value


class PatientStatus(ChoiceEnum):
    INPATIENT = "Inpatient"
    OUTPATIENT = "Outpatient"
    DISCHARGED = "Discharged"


class Gender(ChoiceEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class InventoryCategory(ChoiceEnum):
    MEDICINE = "Medicine"
    EQUIPMENT = "Equipment"
    CONSUMABLE = "Consumable"


class TransactionType(ChoiceEnum):
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"


class Severity(ChoiceEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LedgerColumn(ChoiceEnum):
    DEBIT = "debit"
    CREDIT = "credit"
