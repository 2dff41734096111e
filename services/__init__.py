from .patient_service import register_patient, list_patients, search_patients
from .ledger_service import post_invoice, list_transactions, ledger_column

# Avoid importing optional/third-party heavy modules (e.g. ai_service)
# at package import time. Import submodules directly where needed instead.

__all__ = [
    "register_patient",
    "list_patients",
    "search_patients",
    "post_invoice",
    "list_transactions",
    "ledger_column",
]
