from .config import settings, load_settings, Settings
from .database import Base, make_engine, make_session_factory, create_schema, session_scope
from .helpers import generate_patient_code, generate_transaction_code, format_currency
from .logging_utils import configure_logging

# session_manager imports streamlit; import it directly where needed.

__all__ = [
    "settings",
    "load_settings",
    "Settings",
    "Base",
    "make_engine",
    "make_session_factory",
    "create_schema",
    "session_scope",
    "generate_patient_code",
    "generate_transaction_code",
    "format_currency",
    "configure_logging",
]
