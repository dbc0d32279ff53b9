# ==============================================
# Tests for Scheduled Tasks
# ==============================================

import os
import subprocess
import sys
import textwrap
import threading
from pathlib import Path
from datetime import datetime, timedelta, timezone

import pytest

from fastdb.errors import UsageError
from fastdb.events import Event
from fastdb.scheduling import schedule

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _soon(seconds=0.05):
    return datetime.now() + timedelta(seconds=seconds)


class TestSchedule:

    def test_past_time_raises(self):
        ran = []
        with pytest.raises(UsageError):
            schedule(lambda: ran.append(1), datetime.now() - timedelta(seconds=1))
        assert ran == []

    def test_task_must_be_callable(self):
        with pytest.raises(UsageError):
            schedule("not callable", _soon())

    def test_run_at_must_be_datetime(self):
        with pytest.raises(UsageError):
            schedule(lambda: None, 123.0)

    def test_runs_once_later(self):
        ran = []
        handle = schedule(lambda: ran.append(1), _soon())
        assert ran == []
        assert handle.wait(timeout=5)
        assert ran == [1]
        assert handle.started and handle.done

    def test_timezone_aware_time(self):
        ran = threading.Event()
        handle = schedule(ran.set, datetime.now(timezone.utc) + timedelta(seconds=0.05))
        assert handle.wait(timeout=5)
        assert ran.is_set()

    def test_cancel_pending(self):
        ran = []
        handle = schedule(lambda: ran.append(1), _soon(30))
        assert handle.cancel() is True
        assert handle.cancelled
        assert handle.cancel() is False
        assert ran == []

    def test_cancel_after_run_is_noop(self):
        handle = schedule(lambda: None, _soon())
        handle.wait(timeout=5)
        assert handle.cancel() is False
        assert not handle.cancelled

    def test_errors_go_to_handler(self):
        errors = []

        def broken():
            raise RuntimeError("task failed")

        handle = schedule(broken, _soon(), on_error=errors.append)
        handle.wait(timeout=5)
        assert [str(e) for e in errors] == ["task failed"]


class TestDatabaseScheduleTask:

    def test_past_time_raises(self, db):
        with pytest.raises(UsageError):
            db.schedule_task(lambda: None, datetime.now() - timedelta(minutes=1))
        assert not db.data_loaded

    def test_task_uses_store(self, db):
        gate = threading.Event()

        def task():
            gate.wait(timeout=5)
            db.insert({"Name": "Later"})

        handle = db.schedule_task(task, _soon())
        assert db.get_all() == []
        gate.set()
        assert handle.wait(timeout=5)
        assert db.get({"Name": "Later"}) is not None

    def test_pending_task_runs_before_interpreter_exit(self, tmp_path):
        """A script that schedules a task and ends still runs the task."""
        marker = tmp_path / "ran.marker"
        script = textwrap.dedent(f"""
            from datetime import datetime, timedelta

            from fastdb import Database
            from fastdb.config import AppConfig

            def touch():
                open({str(marker)!r}, "w").close()

            db = Database({str(tmp_path / "users")!r}, config=AppConfig())
            db.schedule_task(touch, datetime.now() + timedelta(seconds=0.3))
        """)
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")])
        )

        subprocess.run(
            [sys.executable, "-c", script],
            cwd=str(tmp_path),
            env=env,
            check=True,
            timeout=30
        )
        assert marker.exists()

    def test_task_error_emitted(self, db):
        errors = []
        db.on(Event.ERROR, errors.append)

        def broken():
            raise ValueError("bad task")

        handle = db.schedule_task(broken, _soon())
        handle.wait(timeout=5)
        assert [str(e) for e in errors] == ["bad task"]

    def test_concurrent_inserts_are_serialized(self, db):
        handles = [
            db.schedule_task(lambda i=i: db.insert({"ID": i}), _soon(0.02))
            for i in range(10)
        ]
        for i in range(10, 20):
            db.insert({"ID": i})
        for handle in handles:
            assert handle.wait(timeout=5)

        ids = sorted(r["ID"] for r in db.get_all())
        assert ids == list(range(20))
