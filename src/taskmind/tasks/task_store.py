# src/taskmind/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from pathlib import Path

from .task_models import ClassificationRecord, Priority, Task, TaskStatus, Workflow

logger = logging.getLogger(__name__)

CONTEXT_TASK_PROCESSING = "task_processing"


class TaskStore:
    """
    SQLite task store.

    Two tables live in one file:
    - tasks: the task list itself
    - ai_memory: append-only log of classifier exchanges

    The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    workflow TEXT NOT NULL DEFAULT 'Personal',
                    priority TEXT NOT NULL DEFAULT 'normal',
                    status TEXT NOT NULL DEFAULT 'active',
                    created_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("completed_at", "REAL")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS ai_memory (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    input TEXT NOT NULL,
                    response TEXT NOT NULL,
                    context_type TEXT NOT NULL,
                    created_at REAL NOT NULL
                )
                """
            )

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            workflow=Workflow(row["workflow"]),
            priority=Priority(row["priority"]),
            status=TaskStatus.from_db(row["status"]),
            created_at=float(row["created_at"] or 0.0),
            completed_at=float(row["completed_at"]) if row["completed_at"] is not None else None,
        )

    # ---- tasks ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        """All tasks (or those with `status`), most recent first."""
        conn = self._get_conn()
        try:
            if status is None:
                rows = conn.execute(
                    "SELECT * FROM tasks ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM tasks WHERE status = ? ORDER BY created_at DESC, rowid DESC",
                    (TaskStatus(status).value,),
                ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (str(task_id),)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def create_task(
        self,
        *,
        title: str,
        description: str,
        workflow: Workflow | str,
        priority: Priority | str,
    ) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")
        # Raises ValueError for anything outside the fixed enumerations.
        wf = Workflow(workflow)
        pri = Priority(priority)

        task = Task(
            id=uuid.uuid4().hex,
            title=title,
            description=description or "",
            workflow=wf,
            priority=pri,
            status=TaskStatus.ACTIVE,
            created_at=time.time(),
        )

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(id, title, description, workflow, priority, status, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task.id,
                    task.title,
                    task.description,
                    task.workflow.value,
                    task.priority.value,
                    task.status.value,
                    task.created_at,
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug(
            "Task added id=%s workflow=%s priority=%s", task.id, task.workflow, task.priority
        )
        return task

    def complete_task(self, task_id: str) -> None:
        """
        Mark a task completed.

        Only active rows are touched, so repeating the call (or racing another
        completion) leaves the first completed_at in place. Unknown ids match
        zero rows.
        """
        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE tasks
                SET status = 'completed', completed_at = ?
                WHERE id = ?
                  AND status = 'active'
                """,
                (now, str(task_id)),
            )
            conn.commit()
            changed = cur.rowcount
        finally:
            conn.close()

        if changed:
            logger.debug("Task completed id=%s", task_id)
        else:
            logger.info("complete_task: no active task id=%s (already completed or unknown)", task_id)

    # ---- classification log ----

    def record_classification(
        self,
        *,
        input_text: str,
        response: str,
        context_type: str = CONTEXT_TASK_PROCESSING,
    ) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO ai_memory(input, response, context_type, created_at) VALUES (?, ?, ?, ?)",
                (input_text, response, context_type, time.time()),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for ai_memory insert")
            return int(rowid)
        finally:
            conn.close()

    def count_classifications(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM ai_memory").fetchone()
            return int(n)
        finally:
            conn.close()

    def list_classifications(self, limit: int = 20) -> list[ClassificationRecord]:
        """Most recent classifier exchanges first (diagnostics only)."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM ai_memory ORDER BY id DESC LIMIT ?", (int(limit),)
            ).fetchall()
            return [
                ClassificationRecord(
                    id=int(r["id"]),
                    input=str(r["input"]),
                    response=str(r["response"]),
                    context_type=str(r["context_type"]),
                    created_at=float(r["created_at"]),
                )
                for r in rows
            ]
        finally:
            conn.close()
