# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env
#   file. Provides typed config objects to the rest of the
#   package (store, backup, CLI).
#
# CLASSES:
# --------
# - StoreConfig (dataclass)
#     extension: str         (default ".fastdb", reserved)
#     backup_extension: str  (default ".fastdb-backup", reserved)
#     indent: int            (default 2)
#     encoding: str          (default "utf-8")
#     atomic_writes: bool    (default True)
#
# - LoggingConfig (dataclass)
#     level: str             (default "WARNING")
#     format: str
#
# - AppConfig (dataclass)
#     store: StoreConfig
#     logging: LoggingConfig
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton so the next get_config() re-reads
#     the environment.
#
# USAGE:
# ------
#   from fastdb.config import get_config
#   config = get_config()
#   print(config.store.indent)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


STORE_EXTENSION = ".fastdb"
BACKUP_EXTENSION = ".fastdb-backup"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class StoreConfig:
    """Backing file configuration."""
    extension: str = STORE_EXTENSION
    backup_extension: str = BACKUP_EXTENSION
    indent: int = 2
    encoding: str = "utf-8"
    atomic_writes: bool = True


@dataclass
class LoggingConfig:
    """Console logging configuration (used by the CLI)."""
    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class AppConfig:
    """Main application configuration."""
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # .env is looked up in the current working directory
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    store_config = StoreConfig(
        indent=int(os.getenv("FASTDB_INDENT", "2")),
        encoding=os.getenv("FASTDB_ENCODING", "utf-8"),
        atomic_writes=_env_bool("FASTDB_ATOMIC_WRITES", True)
    )

    logging_config = LoggingConfig(
        level=os.getenv("FASTDB_LOG_LEVEL", "WARNING").upper()
    )

    _config_instance = AppConfig(
        store=store_config,
        logging=logging_config
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration singleton."""
    global _config_instance
    _config_instance = None
