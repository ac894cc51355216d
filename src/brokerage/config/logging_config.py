"""Logging configuration."""

import logging
import sys
from typing import Optional

from brokerage.config.settings import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure application logging."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
