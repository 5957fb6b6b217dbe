"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    # Flat-file storage
    DATA_DIR: str = os.getenv("DATA_DIR", "data")

    # Transaction policies
    PRICE_THRESHOLD: float = float(os.getenv("PRICE_THRESHOLD", "4000.0"))

    # Inventory optimization
    SAFETY_STOCK_FLOOR: int = int(os.getenv("SAFETY_STOCK_FLOOR", "10"))
    HOLDING_COST_RATE: float = float(os.getenv("HOLDING_COST_RATE", "0.2"))

    # Ledger
    LEDGER_TOKEN_LENGTH: int = int(os.getenv("LEDGER_TOKEN_LENGTH", "10"))
    TIMEZONE: str = os.getenv("TIMEZONE", "")  # Empty means system local time
    AUDIT_INTERVAL_MINUTES: int = int(os.getenv("AUDIT_INTERVAL_MINUTES", "0"))

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")


settings = Settings()
