# ==============================================
# Backup
# ==============================================
#
# PURPOSE:
#   Copy the in-memory snapshot of a loaded Database to a
#   separate file ending with ".fastdb-backup". One-shot; the
#   backup file is never read back by the store.
#
# FUNCTION:
# ---------
# - create_backup(db, backup_path) -> bool
#     Raises UsageError if an argument is missing and
#     DatabaseNotLoadedError if db has not loaded its data yet.
#     I/O errors propagate to the caller.
#
# ==============================================

import logging

from fastdb.errors import DatabaseNotLoadedError, UsageError
from fastdb.persistence import FileStore, RecordCodec, ensure_suffix


logger = logging.getLogger(__name__)


def create_backup(db, backup_path: str) -> bool:
    """
    Write a backup of db's records.

    Args:
        db: A loaded Database
        backup_path: Destination; ".fastdb-backup" is appended if missing

    Returns:
        True once the backup file has been written

    Example:
        db.get_all()
        create_backup(db, "users-2024-01-01")
    """
    if db is None or not backup_path:
        raise UsageError("Missing one or more required arguments")

    store_config = db.config.store
    backup_path = ensure_suffix(backup_path, store_config.backup_extension)

    if not db.data_loaded:
        raise DatabaseNotLoadedError("Database data not loaded")

    records = db.get_all()
    if records is None:
        raise DatabaseNotLoadedError("Database data could not be read")

    codec = RecordCodec(indent=store_config.indent)
    FileStore(
        backup_path,
        encoding=store_config.encoding,
        atomic_writes=store_config.atomic_writes
    ).write_text(codec.encode(records))

    logger.info("Backed up %d records from %s to %s", len(records), db.path, backup_path)
    return True
