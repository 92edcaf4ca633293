"""SQLite embedding store implementation."""

import json
import sqlite3
from pathlib import Path

from ponder.models import Embedding, IndexingStatus, IndexState
from ponder.stores.base import EmbeddingStore


class SQLiteEmbeddingStore(EmbeddingStore):
    """SQLite-based store for embedding rows and indexing status.

    Vectors are stored as JSON arrays. ``question_id`` is unique, so a
    question never has more than one embedding row.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite embedding store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS embeddings (
                    id TEXT PRIMARY KEY,
                    question_id TEXT NOT NULL UNIQUE,
                    vector TEXT NOT NULL,
                    model TEXT NOT NULL,
                    created_at INTEGER NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS indexing_status (
                    question_id TEXT PRIMARY KEY,
                    state TEXT NOT NULL,
                    attempts INTEGER NOT NULL DEFAULT 0,
                    last_error TEXT,
                    updated_at INTEGER NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_status_state ON indexing_status(state)")
            conn.commit()

    def get(self, embedding_id: str) -> Embedding | None:
        """Retrieve an embedding by ID."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, question_id, vector, model, created_at FROM embeddings WHERE id = ?",
                (embedding_id,),
            ).fetchone()
        return self._embedding(row) if row else None

    def get_by_question(self, question_id: str) -> Embedding | None:
        """Retrieve the embedding for a question."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                """
                SELECT id, question_id, vector, model, created_at
                FROM embeddings WHERE question_id = ?
                """,
                (question_id,),
            ).fetchone()
        return self._embedding(row) if row else None

    def upsert(self, embedding: Embedding) -> Embedding:
        """Insert the embedding, or replace the vector of the existing row."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO embeddings (id, question_id, vector, model, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(question_id) DO UPDATE SET
                    vector = excluded.vector,
                    model = excluded.model,
                    created_at = excluded.created_at
                """,
                (
                    embedding.id,
                    embedding.question_id,
                    json.dumps(embedding.vector),
                    embedding.model,
                    embedding.created_at,
                ),
            )
            row = conn.execute(
                "SELECT id FROM embeddings WHERE question_id = ?",
                (embedding.question_id,),
            ).fetchone()
            conn.commit()

        if row[0] == embedding.id:
            return embedding
        return embedding.model_copy(update={"id": row[0]})

    def list_embeddings(self) -> list[Embedding]:
        """List every stored embedding, oldest first."""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, question_id, vector, model, created_at FROM embeddings "
                "ORDER BY created_at, id"
            ).fetchall()
        return [self._embedding(row) for row in rows]

    def count_embeddings(self) -> int:
        """Count the total number of embeddings in the store."""
        with sqlite3.connect(self.db_path) as conn:
            count = conn.execute("SELECT COUNT(id) FROM embeddings").fetchone()
            return count[0] if count else 0

    def get_status(self, question_id: str) -> IndexingStatus:
        """Get the indexing status of a question."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                """
                SELECT question_id, state, attempts, last_error, updated_at
                FROM indexing_status WHERE question_id = ?
                """,
                (question_id,),
            ).fetchone()
        if row is None:
            return IndexingStatus(question_id=question_id)
        return self._status(row)

    def set_status(self, status: IndexingStatus) -> None:
        """Record the indexing status of a question, overwriting if exists."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO indexing_status
                    (question_id, state, attempts, last_error, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    status.question_id,
                    status.state.value,
                    status.attempts,
                    status.last_error,
                    status.updated_at,
                ),
            )
            conn.commit()

    def list_by_state(self, state: IndexState) -> list[IndexingStatus]:
        """List statuses in the given state, oldest update first."""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT question_id, state, attempts, last_error, updated_at
                FROM indexing_status WHERE state = ?
                ORDER BY updated_at, question_id
                """,
                (state.value,),
            ).fetchall()
        return [self._status(row) for row in rows]

    def count_by_state(self) -> dict[IndexState, int]:
        """Count recorded statuses per state."""
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT state, COUNT(question_id) FROM indexing_status GROUP BY state"
            ).fetchall()
        counts = {state: 0 for state in IndexState}
        for state, count in rows:
            counts[IndexState(state)] = count
        return counts

    @staticmethod
    def _embedding(row: tuple) -> Embedding:
        return Embedding(
            id=row[0],
            question_id=row[1],
            vector=json.loads(row[2]),
            model=row[3],
            created_at=row[4],
        )

    @staticmethod
    def _status(row: tuple) -> IndexingStatus:
        return IndexingStatus(
            question_id=row[0],
            state=IndexState(row[1]),
            attempts=row[2],
            last_error=row[3],
            updated_at=row[4],
        )
