"""Runtime settings read from the environment."""

import os
from functools import lru_cache
from pathlib import Path


class Settings:
    def __init__(
        self,
        database_path: str,
        default_currency: str,
        log_level: str,
    ) -> None:
        self.database_path = database_path
        self.default_currency = default_currency
        self.log_level = log_level


def _default_database_path() -> str:
    db_dir = Path.home() / ".pocketledger"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "ledger.db")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    database_path = os.getenv("POCKETLEDGER_DB_PATH") or _default_database_path()
    default_currency = os.getenv("POCKETLEDGER_CURRENCY", "USD").strip().upper()
    log_level = os.getenv("POCKETLEDGER_LOG_LEVEL", "WARNING").strip().upper()
    return Settings(
        database_path=database_path,
        default_currency=default_currency,
        log_level=log_level,
    )
