# ==============================================
# Errors
# ==============================================
#
# Two tiers of failure:
#
#   1. Usage errors      → raised synchronously, before any I/O
#                          (UsageError).
#   2. Operational errors → caught at the Database operation
#                          boundary, emitted on the "error" event,
#                          sticky error_occurred flag set.
#
# CorruptStoreError and DatabaseNotLoadedError are the
# operational errors raised by this package itself; OSError and
# json.JSONDecodeError come from the standard library.
# ==============================================


class FastDBError(Exception):
    """Base class for all fastdb errors."""


class UsageError(FastDBError, ValueError):
    """Invalid arguments passed to a store operation."""


class CorruptStoreError(FastDBError, ValueError):
    """The backing file does not hold a serialized record sequence."""


class DatabaseNotLoadedError(FastDBError, RuntimeError):
    """The store has not read its backing file yet."""
