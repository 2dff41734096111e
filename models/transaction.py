# models/transaction.py

from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import validates

from core.database import Base
from models.enums import TransactionType


class FinancialTransaction(Base):
    __tablename__ = "financial_transactions"

    # Insertion sequence; ledger reads order by this, newest first
    id = Column(Integer, primary_key=True, index=True)

    # Ledger reference, e.g. TXN-9005
    txn_id = Column(String, unique=True, index=True, nullable=False)

    date = Column(String, nullable=False)  # YYYY-MM-DD
    description = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    type = Column(String, nullable=False)
    account_code = Column(String, nullable=False)  # 4001 revenue, 5001 expense

    # Patient code (or other source record) that produced this entry
    related_module_id = Column(String, index=True, nullable=True)

    @validates("type")
    def _validate_type(self, key, value):
        return TransactionType.parse(value, "transaction type").value

    @validates("amount")
    def _validate_amount(self, key, value):
        if value is None or value < 0:
            raise ValueError(f"Transaction amount must be non-negative, got {value!r}.")
        return value

    @property
    def txn_type(self) -> TransactionType:
        return TransactionType(self.type)

    def to_dict(self):
        data = {
            "id": self.txn_id,
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "account_code": self.account_code,
        }
        if self.related_module_id:
            data["related_module_id"] = self.related_module_id
        return data

    def __repr__(self):
        return f"<FinancialTransaction {self.txn_id} {self.type} {self.amount}>"
