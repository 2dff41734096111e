# models/patient.py

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import validates

from core.database import Base
from models.enums import Gender, PatientStatus


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)

    # Human-friendly patient identifier (P-1001, P-1002...)
    patient_id = Column(String, unique=True, index=True, nullable=False)

    # Demographics
    name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)

    # Admission info
    status = Column(String, nullable=False)
    admission_date = Column(String, nullable=False)  # YYYY-MM-DD
    insurance_provider = Column(String, nullable=True)

    @validates("status")
    def _validate_status(self, key, value):
        return PatientStatus.parse(value, "patient status").value

    @validates("gender")
    def _validate_gender(self, key, value):
        return Gender.parse(value, "gender").value

    def to_dict(self):
        return {
            "id": self.patient_id,
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "status": self.status,
            "admission_date": self.admission_date,
            "insurance_provider": self.insurance_provider,
        }

    def __repr__(self):
        return f"<Patient {self.patient_id} - {self.name}>"
