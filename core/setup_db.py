# core/setup_db.py

import logging

from sqlalchemy.orm import Session

from models import FinancialTransaction, InventoryItem, Patient

logger = logging.getLogger(__name__)


DEMO_PATIENTS = [
    {"patient_id": "P-1001", "name": "Sarah Connor", "age": 34, "gender": "Female", "admission_date": "2023-10-20", "status": "Inpatient", "insurance_provider": "Aetna"},
    {"patient_id": "P-1002", "name": "John Doe", "age": 45, "gender": "Male", "admission_date": "2023-10-21", "status": "Outpatient", "insurance_provider": "BlueCross"},
    {"patient_id": "P-1003", "name": "Emily Blunt", "age": 28, "gender": "Female", "admission_date": "2023-10-22", "status": "Inpatient", "insurance_provider": "Private"},
]

DEMO_INVENTORY = [
    {"item_id": "INV-001", "name": "Amoxicillin 500mg", "category": "Medicine", "current_stock": 120, "unit_price": 15, "reorder_level": 150, "last_usage_rate": 45},
    {"item_id": "INV-002", "name": "Surgical Masks", "category": "Consumable", "current_stock": 4500, "unit_price": 0.5, "reorder_level": 1000, "last_usage_rate": 500},
    {"item_id": "INV-003", "name": "Paracetamol IV", "category": "Medicine", "current_stock": 40, "unit_price": 25, "reorder_level": 50, "last_usage_rate": 15},
    {"item_id": "INV-004", "name": "MRI Contrast Dye", "category": "Consumable", "current_stock": 12, "unit_price": 200, "reorder_level": 10, "last_usage_rate": 4},
]

# Oldest first, so insertion order leaves TXN-9001 at the head of the ledger
DEMO_TRANSACTIONS = [
    {"txn_id": "TXN-9004", "date": "2023-10-22", "description": "Insurance Claim P-0098", "amount": 3200, "type": "REVENUE", "account_code": "4002"},
    {"txn_id": "TXN-9003", "date": "2023-10-23", "description": "Utilities - Electricity", "amount": 850, "type": "EXPENSE", "account_code": "5002"},
    {"txn_id": "TXN-9002", "date": "2023-10-24", "description": "Pharmacy Restock: Vendor ABC", "amount": 4500, "type": "EXPENSE", "account_code": "5001"},
    {"txn_id": "TXN-9001", "date": "2023-10-24", "description": "Patient P-1001 Service Payment", "amount": 1200, "type": "REVENUE", "account_code": "4001"},
]


def seed_demo_data(db: Session):
    """
    Loads the demo patients, stock and ledger into an empty store.
    Does nothing if any patient already exists.
    """
    if db.query(Patient).first():
        return

    # Patients are listed newest first, so insert the oldest first
    db.add_all(Patient(**row) for row in reversed(DEMO_PATIENTS))
    db.add_all(InventoryItem(**row) for row in DEMO_INVENTORY)
    db.add_all(FinancialTransaction(**row) for row in DEMO_TRANSACTIONS)
    db.commit()
    logger.info(
        "Seeded demo data: %d patients, %d items, %d transactions",
        len(DEMO_PATIENTS), len(DEMO_INVENTORY), len(DEMO_TRANSACTIONS),
    )
