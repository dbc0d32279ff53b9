# ==============================================
# Database — file-backed record store
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS users interact with. It holds one
#   homogeneous collection of records (dicts) in memory and
#   mirrors it to a single JSON file.
#
# HOW THE FACETS CONNECT:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                        Database                          │
#   │                                                          │
#   │  public operation                                        │
#   │      │                                                   │
#   │      ▼                                                   │
#   │  _load_data()  ── first call only ──► FileStore + Codec  │
#   │      │                                                   │
#   │      ▼                                                   │
#   │  query.matches() / views  (in-memory list)               │
#   │      │                                                   │
#   │      ▼ (mutations only)                                  │
#   │  _save_data()  ── full rewrite ──► FileStore + Codec     │
#   │      │                                                   │
#   │      ▼                                                   │
#   │  EventEmitter.emit(...)                                  │
#   └──────────────────────────────────────────────────────────┘
#
#   schedule_task() is independent: it runs a callable later on a
#   timer thread and only shares the "error" event.
#
# CLASS: Database
# ---------------
#
#   Constructor:
#   ------------
#   - __init__(path, default_record=None, config=None)
#       Appends ".fastdb" to path once if missing. Nothing is read
#       until the first operation (load-on-first-use).
#
#   Public Methods:
#   ---------------
#   MUTATIONS:
#   - insert(data) -> dict | None
#   - delete(query) -> int
#   - delete_all() -> bool
#
#   QUERIES:
#   - get(query) -> dict | None
#   - get_all() -> list[dict] | None
#   - data_exists(query) -> bool
#   - count_entries(query) -> int | None
#
#   DERIVED VIEWS:
#   - find_distinct(field) -> list | None
#   - filter_data(predicate) -> list[dict] | None
#   - paginate_data(page, page_size) -> list[dict] | None
#
#   OTHER:
#   - schedule_task(task, run_at) -> ScheduledTask
#   - on / once / off / emit / remove_all_listeners  (observer interface)
#   - clear_error()
#
#   Attributes:
#   -----------
#   - data_loaded: bool      → backing file has been read (or created)
#   - error_occurred: bool   → sticky, set on the first caught failure
#
# ERROR HANDLING:
# ---------------
#   Usage errors (empty query on delete / data_exists / count_entries,
#   empty field, non-callable predicate, bad page arguments, past
#   schedule time) raise UsageError before any I/O.
#
#   Operational errors (I/O, corrupt file, a listener raising during
#   a mutation) are caught, logged, emitted on Event.ERROR, set
#   error_occurred and the operation returns its failure value
#   (None / False / 0).
#
# CONCURRENCY:
# ------------
#   Every operation holds a per-handle RLock, so a scheduled task
#   and a direct caller never see a half-applied mutation. No
#   locking against other processes writing the same file.
#
# ==============================================

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from fastdb.config import AppConfig, get_config
from fastdb.errors import UsageError
from fastdb.events import ConnectedInfo, DeletionInfo, Event, EventEmitter
from fastdb.persistence import FileStore, RecordCodec, ensure_suffix
from fastdb.query import distinct_values, is_empty_query, matches, page_slice, validate_page
from fastdb.scheduling import ScheduledTask, schedule


logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Database:
    """
    File-backed store for one collection of records.

    Example:
        db = Database("users", {"Name": "", "ID": 0})
        db.on("error", print)

        if db.data_exists({"Name": "John"}):
            db.delete({"Name": "John"})
        else:
            db.insert({"Name": "John", "ID": 1})
    """

    def __init__(
        self,
        path: str,
        default_record: Optional[Record] = None,
        config: Optional[AppConfig] = None
    ):
        """
        Create a store handle. The backing file is not touched yet.

        Args:
            path: Backing file path; ".fastdb" is appended if missing
            default_record: Base field values used to fill gaps on insert
            config: Application configuration. If None, loads from environment.
        """
        self._config = config or get_config()
        store_config = self._config.store

        self._path = ensure_suffix(path, store_config.extension)
        self._default_record: Record = dict(default_record or {})

        self._file = FileStore(
            self._path,
            encoding=store_config.encoding,
            atomic_writes=store_config.atomic_writes
        )
        self._codec = RecordCodec(indent=store_config.indent)
        self._events = EventEmitter()
        self._lock = threading.RLock()

        # Internal state
        self._data: List[Record] = []
        self.data_loaded = False
        self.error_occurred = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def default_record(self) -> Record:
        return dict(self._default_record)

    # ------------------------------------------------------------------
    # Observer interface
    # ------------------------------------------------------------------

    def on(self, event, listener: Callable[[Any], Any]) -> "Database":
        """
        Register a listener for an event.

        Args:
            event: Event enum or its value ("connected", "new_data",
                   "data_deleted", "error")
            listener: Called with the event payload

        Returns:
            self
        """
        self._events.on(event, listener)
        return self

    def once(self, event, listener: Callable[[Any], Any]) -> "Database":
        """Register a listener that is removed after its first call."""
        self._events.once(event, listener)
        return self

    def off(self, event, listener: Callable[[Any], Any]) -> "Database":
        self._events.off(event, listener)
        return self

    def emit(self, event, payload: Any = None) -> bool:
        return self._events.emit(event, payload)

    def listener_count(self, event) -> int:
        return self._events.listener_count(event)

    def remove_all_listeners(self, event=None) -> "Database":
        """Drop every listener of event, or of all events if None."""
        self._events.remove_all_listeners(event)
        return self

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_data(self) -> None:
        """
        Read the backing file on first use.

        A missing file is the normal first-run case: the store starts
        empty and the empty sequence is written immediately. Any other
        read or parse failure propagates.
        """
        if self.data_loaded:
            return

        try:
            self._data = self._codec.decode(self._file.read_text())
            logger.info("Loaded %d records from %s", len(self._data), self._path)
        except FileNotFoundError:
            self._data = []
            self._save_data()
            logger.info("No data file at %s, created an empty one", self._path)

        self.data_loaded = True
        self.emit(Event.CONNECTED, ConnectedInfo(path=self._path))

    def _save_data(self) -> None:
        """Rewrite the whole backing file from the in-memory sequence."""
        self._file.write_text(self._codec.encode(self._data))

    def _commit(self, new_data: List[Record]) -> None:
        """
        Swap in a new record sequence and persist it.

        The previous sequence is restored if the write fails, so memory
        never runs ahead of a failed save.
        """
        previous = self._data
        self._data = new_data
        try:
            self._save_data()
        except Exception:
            self._data = previous
            raise

    def _fail(self, error: Exception, operation: str, result: Any = None) -> Any:
        """Report an operational error and return the failure value."""
        logger.warning("%s failed on %s: %s", operation, self._path, error)
        self.error_occurred = True
        self.emit(Event.ERROR, error)
        return result

    def clear_error(self) -> None:
        """Reset the sticky error_occurred flag."""
        self.error_occurred = False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, data: Optional[Record]) -> Optional[Record]:
        """
        Insert a new record built from the default record and data.

        Args:
            data: Fields to store; they override the default record

        Returns:
            The stored record, or None if data was empty or the write failed

        Example:
            record = db.insert({"Name": "John", "ID": 1})
            record["Name"]  # "John"
        """
        if not data:
            self.emit(Event.ERROR, UsageError("Data to insert cannot be empty"))
            return None

        with self._lock:
            try:
                self._load_data()
                record = {**self._default_record, **data}
                self._commit(self._data + [record])
                self.emit(Event.NEW_DATA, record)
                return record
            except Exception as e:
                return self._fail(e, "insert")

    def delete_all(self) -> bool:
        """
        Remove every record.

        Returns:
            True on success, False if loading or saving failed
        """
        with self._lock:
            try:
                self._load_data()
                original_length = len(self._data)
                self._commit([])
                logger.info("Deleted all %d records from %s", original_length, self._path)
                self.emit(Event.DATA_DELETED, DeletionInfo(
                    original_length=original_length,
                    actual_length=0,
                    completed=True
                ))
                return True
            except Exception as e:
                return self._fail(e, "delete_all", False)

    def delete(self, query: Optional[Record]) -> int:
        """
        Delete every record matching query.

        Args:
            query: Field -> value to match; must not be empty

        Returns:
            Number of records removed (0 if the write failed)

        Raises:
            UsageError: If query is empty
        """
        if is_empty_query(query):
            raise UsageError("Cannot delete with an empty query")

        with self._lock:
            try:
                self._load_data()
                original_length = len(self._data)
                kept = [entry for entry in self._data if not matches(entry, query)]
                self._commit(kept)

                deleted_count = original_length - len(kept)
                logger.info("Deleted %d records from %s", deleted_count, self._path)
                self.emit(Event.DATA_DELETED, DeletionInfo(
                    original_length=original_length,
                    actual_length=len(kept),
                    completed=True
                ))
                return deleted_count
            except Exception as e:
                return self._fail(e, "delete", 0)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> Optional[List[Record]]:
        """
        Return all records in insertion order.

        Returns:
            A new list of the stored records, or None on failure
        """
        with self._lock:
            try:
                self._load_data()
                return list(self._data)
            except Exception as e:
                return self._fail(e, "get_all")

    def get(self, query: Optional[Record]) -> Optional[Record]:
        """
        Return the first record matching query.

        An empty query is reported on the error event and yields None
        rather than raising.

        Args:
            query: Field -> value to match

        Returns:
            The matching record, or None
        """
        if is_empty_query(query):
            self.emit(Event.ERROR, UsageError("Cannot search for an empty query"))
            return None

        with self._lock:
            try:
                self._load_data()
                return next(
                    (entry for entry in self._data if matches(entry, query)),
                    None
                )
            except Exception as e:
                return self._fail(e, "get")

    def data_exists(self, query: Optional[Record]) -> bool:
        """
        Check whether any record matches query.

        Raises:
            UsageError: If query is empty
        """
        if is_empty_query(query):
            raise UsageError("Cannot check existence with an empty query")

        with self._lock:
            try:
                self._load_data()
                return any(matches(entry, query) for entry in self._data)
            except Exception as e:
                return self._fail(e, "data_exists", False)

    def count_entries(self, query: Optional[Record]) -> Optional[int]:
        """
        Count the records matching query.

        Returns:
            Number of matches, or None on failure

        Raises:
            UsageError: If query is empty
        """
        if is_empty_query(query):
            raise UsageError("Cannot count entries with an empty query")

        with self._lock:
            try:
                self._load_data()
                return sum(1 for entry in self._data if matches(entry, query))
            except Exception as e:
                return self._fail(e, "count_entries")

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def find_distinct(self, field: str) -> Optional[List[Any]]:
        """
        Distinct values of one field, in first-seen order.

        Records that lack the field contribute nothing (no None
        placeholder is added for them).

        Args:
            field: Field name

        Returns:
            List of distinct values, or None on failure

        Raises:
            UsageError: If field is empty
        """
        if not field:
            raise UsageError("Field to find distinct values for cannot be empty")

        with self._lock:
            try:
                self._load_data()
                return distinct_values(self._data, field)
            except Exception as e:
                return self._fail(e, "find_distinct")

    def filter_data(self, predicate: Callable[[Record], bool]) -> Optional[List[Record]]:
        """
        Records for which predicate returns a truthy value.

        Raises:
            UsageError: If predicate is not callable
        """
        if not callable(predicate):
            raise UsageError("Filter function cannot be empty")

        with self._lock:
            try:
                self._load_data()
                return [entry for entry in self._data if predicate(entry)]
            except Exception as e:
                return self._fail(e, "filter_data")

    def paginate_data(self, page: int, page_size: int) -> Optional[List[Record]]:
        """
        One page of records. Pages start at 1.

        A page past the end returns a short or empty list.

        Raises:
            UsageError: If page or page_size is missing, zero or negative
        """
        validate_page(page, page_size)

        with self._lock:
            try:
                self._load_data()
                return page_slice(self._data, page, page_size)
            except Exception as e:
                return self._fail(e, "paginate_data")

    # ------------------------------------------------------------------
    # Deferred tasks
    # ------------------------------------------------------------------

    def schedule_task(self, task: Callable[[], Any], run_at: datetime) -> ScheduledTask:
        """
        Run task once at run_at on a background timer thread.

        Exceptions raised by task are emitted on the error event.

        Args:
            task: Zero-argument callable, usually calling this store
            run_at: When to run it

        Returns:
            Handle with cancel()

        Raises:
            UsageError: If run_at is in the past
        """
        return schedule(task, run_at, on_error=self._report_task_error)

    def _report_task_error(self, error: Exception) -> None:
        logger.warning("Scheduled task on %s failed: %s", self._path, error)
        with self._lock:
            self.emit(Event.ERROR, error)

    def __repr__(self) -> str:
        state = "loaded" if self.data_loaded else "unloaded"
        return f"<Database path={self._path!r} {state}>"


def create_database(
    path: str,
    default_record: Optional[Record] = None,
    config: Optional[AppConfig] = None
) -> Database:
    """Create a new Database handle (same as calling Database directly)."""
    return Database(path, default_record, config)
