"""
General ledger: invoice posting, debit/credit rendering and totals.

The ledger is append-only. Entries are only ever created here and in
patient_service.register_patient.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.config import settings
from core.helpers import generate_transaction_code
from core.time_utils import today_iso, is_iso_date
from models.ai_results import InvoiceData
from models.enums import LedgerColumn, TransactionType
from models.transaction import FinancialTransaction

logger = logging.getLogger(__name__)


# Every transaction type lands in exactly one column
_COLUMN_BY_TYPE = {
    TransactionType.EXPENSE: LedgerColumn.DEBIT,
    TransactionType.ASSET: LedgerColumn.DEBIT,
    TransactionType.REVENUE: LedgerColumn.CREDIT,
    TransactionType.LIABILITY: LedgerColumn.CREDIT,
}


def ledger_column(txn_type) -> LedgerColumn:
    return _COLUMN_BY_TYPE[TransactionType.parse(txn_type, "transaction type")]


def ledger_row(txn: FinancialTransaction) -> dict:
    """Flatten a transaction into a ledger table row with debit/credit cells."""
    column = ledger_column(txn.type)
    row = txn.to_dict()
    row["debit"] = txn.amount if column is LedgerColumn.DEBIT else None
    row["credit"] = txn.amount if column is LedgerColumn.CREDIT else None
    return row


# ------------------------------------------
# Post a parsed invoice as an expense
# ------------------------------------------
def post_invoice(db: Session, invoice: InvoiceData) -> FinancialTransaction:
    if invoice is None:
        raise ValueError("No parsed invoice to post.")
    if invoice.total_amount is None or invoice.total_amount <= 0:
        raise ValueError(f"Invoice total must be positive, got {invoice.total_amount!r}.")

    invoice_date = (invoice.invoice_date or "").strip()
    if invoice_date and not is_iso_date(invoice_date):
        logger.warning("Invoice date %r is not YYYY-MM-DD; booking it today", invoice_date)
        invoice_date = ""

    description = f"Inv: {invoice.vendor_name} - {invoice.first_item_description or 'General'}"

    try:
        txn = FinancialTransaction(
            txn_id=generate_transaction_code(db),
            date=invoice_date or today_iso(),
            description=description,
            amount=invoice.total_amount,
            type=TransactionType.EXPENSE,
            account_code=settings.expense_account,
        )
        db.add(txn)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Posted invoice from %s as %s (%s)", invoice.vendor_name, txn.txn_id, txn.amount)
    return txn


# ------------------------------------------
# Reads
# ------------------------------------------
def list_transactions(db: Session, limit: int | None = None):
    query = db.query(FinancialTransaction).order_by(FinancialTransaction.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def transactions_for(db: Session, related_module_id: str):
    return (
        db.query(FinancialTransaction)
        .filter(FinancialTransaction.related_module_id == related_module_id)
        .order_by(FinancialTransaction.id.desc())
        .all()
    )


def ledger_summary(db: Session) -> dict:
    totals = dict(
        db.query(FinancialTransaction.type, func.coalesce(func.sum(FinancialTransaction.amount), 0))
        .group_by(FinancialTransaction.type)
        .all()
    )
    revenue = float(totals.get(TransactionType.REVENUE.value, 0))
    expenses = float(totals.get(TransactionType.EXPENSE.value, 0))
    debits = sum(float(v) for k, v in totals.items() if ledger_column(k) is LedgerColumn.DEBIT)
    credits = sum(float(v) for k, v in totals.items() if ledger_column(k) is LedgerColumn.CREDIT)
    return {
        "total_revenue": revenue,
        "total_expenses": expenses,
        "net_income": revenue - expenses,
        "total_debits": debits,
        "total_credits": credits,
        "transaction_count": db.query(FinancialTransaction).count(),
    }
