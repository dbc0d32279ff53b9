# ==============================================
# fastdb — embedded, file-backed record store
# ==============================================
#
# Package Structure:
#
# fastdb/
# ├── persistence/   # Backing file I/O + JSON codec
# ├── query/         # Partial-match predicate, distinct, pagination
# ├── events/        # Observer interface (connected, new_data, ...)
# ├── scheduling/    # One-shot deferred tasks
# ├── database.py    # Database — the store users interact with
# ├── backup.py      # create_backup()
# ├── config.py      # Configuration management
# ├── errors.py      # Exception hierarchy
# ├── log.py         # Logging setup for applications / CLI
# └── cli.py         # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from fastdb.backup import create_backup
from fastdb.database import Database, create_database
from fastdb.errors import (
    CorruptStoreError,
    DatabaseNotLoadedError,
    FastDBError,
    UsageError,
)
from fastdb.events import ConnectedInfo, DeletionInfo, Event
from fastdb.scheduling import ScheduledTask

__all__ = [
    "Database",
    "create_database",
    "create_backup",
    "Event",
    "ConnectedInfo",
    "DeletionInfo",
    "ScheduledTask",
    "FastDBError",
    "UsageError",
    "CorruptStoreError",
    "DatabaseNotLoadedError",
]
