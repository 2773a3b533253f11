"""SQLite storage of pipeline runs."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, Sequence

import aiosqlite

from ..config import resolve_db_path
from ..models import AgentMessage, PipelineRun, StoredMessage, to_plain


class IStorage(Protocol):
    """Persistent history of pipeline runs (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Runs
    async def save_run(
        self, run: PipelineRun, messages: Sequence[AgentMessage] = ()
    ) -> None:
        """Save a pipeline run and its bus messages in one transaction."""
        ...

    async def get_run(self, run_id: str) -> PipelineRun | None:
        """Get a pipeline run by ID."""
        ...

    async def get_runs(self, limit: int = 20) -> list[PipelineRun]:
        """Get pipeline runs (newest first)."""
        ...

    # Bus messages
    async def save_bus_messages(self, run_id: str, messages: list[AgentMessage]) -> None:
        """Save the bus audit queue of a run."""
        ...

    async def get_bus_messages(
        self, run_id: str | None = None, limit: int = 100
    ) -> list[StoredMessage]:
        """Get bus messages (newest first), optionally for one run."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


def _parse_ts(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # Runs
    async def save_run(
        self, run: PipelineRun, messages: Sequence[AgentMessage] = ()
    ) -> None:
        """Save a pipeline run and its bus messages in one transaction."""
        conn = self._require_conn()

        try:
            await conn.execute(
                """
                INSERT OR REPLACE INTO pipeline_runs (id, scenario, outputs, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    run.id,
                    json.dumps(to_plain(run.scenario)),
                    json.dumps(to_plain(run.outputs)),
                    run.created_at.isoformat(),
                ),
            )
            await self._insert_bus_messages(conn, run.id, messages)
        except Exception:
            await conn.rollback()
            raise
        await conn.commit()

    async def get_run(self, run_id: str) -> PipelineRun | None:
        """Get a pipeline run by ID."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT id, scenario, outputs, created_at
            FROM pipeline_runs
            WHERE id = ?
            """,
            (run_id,),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return PipelineRun(
            id=row[0],
            scenario=json.loads(row[1]),
            outputs=json.loads(row[2]),
            created_at=_parse_ts(row[3]),
        )

    async def get_runs(self, limit: int = 20) -> list[PipelineRun]:
        """Get pipeline runs (newest first)."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT id, scenario, outputs, created_at
            FROM pipeline_runs
            ORDER BY created_at DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()

        return [
            PipelineRun(
                id=row[0],
                scenario=json.loads(row[1]),
                outputs=json.loads(row[2]),
                created_at=_parse_ts(row[3]),
            )
            for row in rows
        ]

    # Bus messages
    async def save_bus_messages(self, run_id: str, messages: list[AgentMessage]) -> None:
        """Save the bus audit queue of a run."""
        conn = self._require_conn()

        try:
            await self._insert_bus_messages(conn, run_id, messages)
        except Exception:
            await conn.rollback()
            raise
        await conn.commit()

    async def _insert_bus_messages(
        self,
        conn: aiosqlite.Connection,
        run_id: str,
        messages: Sequence[AgentMessage],
    ) -> None:
        await conn.executemany(
            """
            INSERT OR REPLACE INTO bus_messages
            (id, run_id, sender, recipient, type, topic, priority, data, timestamp)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    message.id,
                    run_id,
                    message.sender,
                    message.to,
                    message.type.value,
                    message.content.topic,
                    message.content.priority.value,
                    json.dumps(to_plain(message.content.data)),
                    message.timestamp.isoformat(),
                )
                for message in messages
            ],
        )

    async def get_bus_messages(
        self, run_id: str | None = None, limit: int = 100
    ) -> list[StoredMessage]:
        """Get bus messages (newest first), optionally for one run."""
        conn = self._require_conn()

        where_clause = "WHERE run_id = ?" if run_id else ""
        params: list = [run_id] if run_id else []
        params.append(limit)

        cursor = await conn.execute(
            f"""
            SELECT id, run_id, sender, recipient, type, topic, priority, data, timestamp
            FROM bus_messages
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
            """,
            params,
        )
        rows = await cursor.fetchall()

        return [
            StoredMessage(
                id=row[0],
                run_id=row[1],
                sender=row[2],
                recipient=row[3],
                type=row[4],
                topic=row[5],
                priority=row[6],
                data=json.loads(row[7]) if row[7] is not None else None,
                timestamp=_parse_ts(row[8]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ["bus_messages", "pipeline_runs"]:
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
