import logging
from typing import Optional


def configure_logging(log_level: str = 'INFO') -> None:
    """Configure root logging for the backend; log_level is a level name such as DEBUG."""
    logging.basicConfig(
        level=log_level.upper(),
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger instance."""
    return logging.getLogger(name if name else __name__)
