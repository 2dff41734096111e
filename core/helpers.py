import re

from sqlalchemy.orm import Session


def _numeric_suffix(code: str, prefix: str):
    m = re.fullmatch(rf"{re.escape(prefix)}(\d+)", code or "")
    return int(m.group(1)) if m else None


def next_code(db: Session, column, prefix: str, start: int, width: int = 4) -> str:
    """Return the next sequential code for a column, e.g. P-1004, TXN-9005.

    Codes are monotonic within a store: one past the highest existing numeric
    suffix with the given prefix, or `start` on an empty table.
    """
    existing = db.query(column).filter(column.like(f"{prefix}%")).all()
    numbers = [n for n in (_numeric_suffix(row[0], prefix) for row in existing) if n is not None]
    next_num = max(numbers) + 1 if numbers else start
    return f"{prefix}{next_num:0{width}d}"


def generate_patient_code(db: Session) -> str:
    from models.patient import Patient

    return next_code(db, Patient.patient_id, "P-", 1001)


def generate_transaction_code(db: Session) -> str:
    from models.transaction import FinancialTransaction

    return next_code(db, FinancialTransaction.txn_id, "TXN-", 9001)


def format_currency(amount) -> str:
    """$1,240.50 style; whole amounts drop the cents."""
    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if float(amount).is_integer():
        return f"{sign}${int(amount):,}"
    return f"{sign}${amount:,.2f}"
