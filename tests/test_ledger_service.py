import pytest

from core.time_utils import today_iso
from models import FinancialTransaction, InvalidChoiceError, LedgerColumn, TransactionType
from models.ai_results import InvoiceData
from services import ledger_service


def make_invoice(**overrides):
    data = {
        "vendorName": "Acme",
        "totalAmount": 500,
        "invoiceDate": "2023-10-25",
        "lineItems": [{"description": "Gloves", "amount": 500}],
        "confidence": 0.9,
    }
    data.update(overrides)
    return InvoiceData.model_validate(data)


def test_post_invoice_creates_expense_entry(db):
    txn = ledger_service.post_invoice(db, make_invoice())

    assert txn.type == TransactionType.EXPENSE.value
    assert txn.account_code == "5001"
    assert txn.amount == 500
    assert txn.date == "2023-10-25"
    assert txn.description == "Inv: Acme - Gloves"
    assert txn.related_module_id is None
    assert ledger_service.list_transactions(db)[0].txn_id == txn.txn_id


def test_post_invoice_defaults_date_and_description(db):
    txn = ledger_service.post_invoice(db, make_invoice(invoiceDate="", lineItems=[]))
    assert txn.date == today_iso()
    assert txn.description == "Inv: Acme - General"


def test_post_invoice_appends_exactly_one_entry(db):
    before = db.query(FinancialTransaction).count()
    ledger_service.post_invoice(db, make_invoice())
    assert db.query(FinancialTransaction).count() == before + 1


@pytest.mark.parametrize("total", [0, -25.5])
def test_post_invoice_rejects_non_positive_totals(db, total):
    before = db.query(FinancialTransaction).count()
    with pytest.raises(ValueError):
        ledger_service.post_invoice(db, make_invoice(totalAmount=total))
    assert db.query(FinancialTransaction).count() == before


def test_post_invoice_requires_an_invoice(db):
    with pytest.raises(ValueError):
        ledger_service.post_invoice(db, None)


@pytest.mark.parametrize(
    "txn_type, column",
    [
        (TransactionType.REVENUE, LedgerColumn.CREDIT),
        (TransactionType.LIABILITY, LedgerColumn.CREDIT),
        (TransactionType.EXPENSE, LedgerColumn.DEBIT),
        (TransactionType.ASSET, LedgerColumn.DEBIT),
    ],
)
def test_ledger_column_by_type(txn_type, column):
    assert ledger_service.ledger_column(txn_type) is column
    assert ledger_service.ledger_column(txn_type.value) is column


def test_ledger_column_covers_every_type():
    columns = {t: ledger_service.ledger_column(t) for t in TransactionType}
    assert set(columns) == set(TransactionType)
    assert all(isinstance(c, LedgerColumn) for c in columns.values())


def test_ledger_column_rejects_unknown_type():
    with pytest.raises(InvalidChoiceError):
        ledger_service.ledger_column("EQUITY")


def test_ledger_row_fills_one_cell_only(db):
    rows = [ledger_service.ledger_row(t) for t in ledger_service.list_transactions(db)]
    for row in rows:
        assert (row["debit"] is None) != (row["credit"] is None)
    by_id = {r["id"]: r for r in rows}
    assert by_id["TXN-9001"]["credit"] == 1200
    assert by_id["TXN-9002"]["debit"] == 4500


def test_seeded_ledger_is_newest_first(db):
    assert [t.txn_id for t in ledger_service.list_transactions(db)] == [
        "TXN-9001", "TXN-9002", "TXN-9003", "TXN-9004",
    ]
    assert len(ledger_service.list_transactions(db, limit=2)) == 2


def test_ledger_summary(db):
    summary = ledger_service.ledger_summary(db)
    assert summary["total_revenue"] == 4400
    assert summary["total_expenses"] == 5350
    assert summary["net_income"] == -950
    assert summary["total_credits"] == 4400
    assert summary["total_debits"] == 5350
    assert summary["transaction_count"] == 4


def test_transactions_are_validated_on_construction():
    with pytest.raises(ValueError):
        FinancialTransaction(txn_id="TXN-1", date="2023-01-01", description="x",
                             amount=-1, type="REVENUE", account_code="4001")
    with pytest.raises(InvalidChoiceError):
        FinancialTransaction(txn_id="TXN-1", date="2023-01-01", description="x",
                             amount=1, type="EQUITY", account_code="4001")


@pytest.mark.parametrize("raw_date", ["Oct 25, 2023", "25/10/2023", "2023-13-40"])
def test_post_invoice_books_unparseable_dates_today(db, raw_date):
    txn = ledger_service.post_invoice(db, make_invoice(invoiceDate=raw_date))
    assert txn.date == today_iso()


def test_post_invoice_strips_date_whitespace(db):
    txn = ledger_service.post_invoice(db, make_invoice(invoiceDate=" 2023-10-25 "))
    assert txn.date == "2023-10-25"
