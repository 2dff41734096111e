"""
Application state for one dashboard session.

HospitalState owns a private store (engine + session factory). Pages read
snapshots from it and change it only through register_patient and
post_invoice, which keep the ledger in step with patients and invoices.
"""

import logging

from core.database import create_schema, make_engine, make_session_factory, session_scope
from core.setup_db import seed_demo_data
from services import inventory_service, ledger_service, patient_service

logger = logging.getLogger(__name__)


class HospitalState:
    def __init__(self, engine):
        self.engine = engine
        self._session_factory = make_session_factory(engine)

    @classmethod
    def create(cls, url: str | None = None, seed: bool = True):
        state = cls(make_engine(url))
        create_schema(state.engine)
        if seed:
            with state.session() as db:
                seed_demo_data(db)
        return state

    def session(self):
        return session_scope(self._session_factory)

    def dispose(self):
        self.engine.dispose()

    # -----------------------------
    # Reads (plain-dict snapshots)
    # -----------------------------
    def patients(self):
        with self.session() as db:
            return [p.to_dict() for p in patient_service.list_patients(db)]

    def search_patients(self, term: str | None):
        with self.session() as db:
            return [p.to_dict() for p in patient_service.search_patients(db, term)]

    def inventory(self):
        with self.session() as db:
            return [i.to_dict() for i in inventory_service.list_inventory(db)]

    def low_stock(self):
        with self.session() as db:
            return [i.to_dict() for i in inventory_service.get_low_stock_items(db)]

    def transactions(self, limit: int | None = None):
        with self.session() as db:
            return [t.to_dict() for t in ledger_service.list_transactions(db, limit)]

    def ledger(self):
        """Transactions as ledger rows with debit/credit cells, newest first."""
        with self.session() as db:
            return [ledger_service.ledger_row(t) for t in ledger_service.list_transactions(db)]

    def summary(self) -> dict:
        with self.session() as db:
            data = ledger_service.ledger_summary(db)
            data["active_patients"] = patient_service.count_active_patients(db)
            data["low_stock_items"] = len(inventory_service.get_low_stock_items(db))
            return data

    # -----------------------------
    # Mutations
    # -----------------------------
    def register_patient(self, name, age, gender, status="Outpatient",
                         insurance_provider=None, admission_date=None):
        """Returns (patient dict, fee transaction dict)."""
        with self.session() as db:
            patient, fee = patient_service.register_patient(
                db,
                name=name,
                age=age,
                gender=gender,
                status=status,
                insurance_provider=insurance_provider,
                admission_date=admission_date,
            )
            return patient.to_dict(), fee.to_dict()

    def post_invoice(self, invoice):
        with self.session() as db:
            return ledger_service.post_invoice(db, invoice).to_dict()
