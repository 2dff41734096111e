import logging

from sqlalchemy.orm import Session

from core.config import settings
from core.helpers import generate_patient_code, generate_transaction_code
from core.time_utils import today_iso, is_iso_date
from models.enums import Gender, PatientStatus, TransactionType
from models.patient import Patient
from models.transaction import FinancialTransaction

logger = logging.getLogger(__name__)

MAX_AGE = 130


# ------------------------------------------
# Input checks (run before anything is written)
# ------------------------------------------
def validate_registration(name, age, gender, status):
    name = (name or "").strip()
    if not name:
        raise ValueError("Patient name cannot be empty.")

    if isinstance(age, bool) or not isinstance(age, int):
        try:
            age = int(str(age).strip())
        except (TypeError, ValueError):
            raise ValueError(f"Patient age must be a whole number, got {age!r}.")
    if age < 0 or age > MAX_AGE:
        raise ValueError(f"Patient age must be between 0 and {MAX_AGE}, got {age}.")

    gender = Gender.parse(gender, "gender")
    status = PatientStatus.parse(status, "patient status")
    return name, age, gender, status


# ------------------------------------------
# Register a patient and book the registration fee
# ------------------------------------------
def register_patient(
    db: Session,
    name: str,
    age: int,
    gender: str,
    status: str = PatientStatus.OUTPATIENT,
    insurance_provider: str | None = None,
    admission_date: str | None = None,
):
    """Create a patient and its REVENUE ledger entry in one commit.

    Returns (patient, transaction). Invalid input raises ValueError and
    nothing is written; a database error rolls both rows back.
    """
    name, age, gender, status = validate_registration(name, age, gender, status)
    if admission_date is not None and not is_iso_date(admission_date):
        raise ValueError(f"Admission date must be YYYY-MM-DD, got {admission_date!r}.")

    today = today_iso()
    try:
        patient = Patient(
            patient_id=generate_patient_code(db),
            name=name,
            age=age,
            gender=gender,
            status=status,
            admission_date=admission_date or today,
            insurance_provider=(insurance_provider or "").strip() or None,
        )
        db.add(patient)
        db.flush()

        fee = FinancialTransaction(
            txn_id=generate_transaction_code(db),
            date=today,
            description=f"Registration Fee: {patient.name} ({patient.patient_id})",
            amount=settings.registration_fee,
            type=TransactionType.REVENUE,
            account_code=settings.revenue_account,
            related_module_id=patient.patient_id,
        )
        db.add(fee)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Registered patient %s with fee %s", patient.patient_id, fee.txn_id)
    return patient, fee


# ------------------------------------------
# Fetch patients, newest first
# ------------------------------------------
def list_patients(db: Session):
    return db.query(Patient).order_by(Patient.id.desc()).all()


def search_patients(db: Session, term: str | None):
    """Case-insensitive match on name or patient code."""
    q = (term or "").strip().lower()
    if not q:
        return list_patients(db)
    return [
        p for p in list_patients(db)
        if q in (p.name or "").lower() or q in p.patient_id.lower()
    ]


def count_active_patients(db: Session) -> int:
    return db.query(Patient).filter(Patient.status != PatientStatus.DISCHARGED.value).count()
