# ==============================================
# PERSISTENCE (backing file + serialization)
# ==============================================
#
# This package handles reading and writing the store's single
# backing file. The whole record sequence is rewritten on every
# save; there are no partial or append writes.
#
# Modules:
# --------
# - file_store.py  → Path suffix rule, read / write / exists
# - codec.py       → Records <-> indented JSON text
#
# ==============================================

from .file_store import FileStore, ensure_suffix
from .codec import RecordCodec

__all__ = ["FileStore", "RecordCodec", "ensure_suffix"]
