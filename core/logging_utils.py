import logging

from core.config import settings

_configured = False


def configure_logging(level: str | None = None):
    """Set up root logging once. Later calls only adjust the level."""
    global _configured
    level = (level or settings.log_level or "INFO").upper()
    if not _configured:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        _configured = True
    else:
        logging.getLogger().setLevel(level)
