"""SQLite question store implementation."""

import sqlite3
from pathlib import Path

from ponder.models import Question, QuestionPage, User
from ponder.stores.base import QuestionStore


def encode_cursor(question: Question) -> str:
    return f"{question.created_at}:{question.id}"


def decode_cursor(cursor: str) -> tuple[int, str]:
    created_at, sep, question_id = cursor.partition(":")
    if not sep or not created_at.isdigit():
        raise ValueError(f"Invalid pagination cursor: {cursor!r}")
    return int(created_at), question_id


class SQLiteQuestionStore(QuestionStore):
    """SQLite-based store for users and questions."""

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite question store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    subject TEXT NOT NULL UNIQUE,
                    email TEXT NOT NULL DEFAULT '',
                    name TEXT,
                    created_at INTEGER NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS questions (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    text TEXT NOT NULL,
                    created_at INTEGER NOT NULL,
                    updated_at INTEGER NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_question_owner_created "
                "ON questions(owner_id, created_at)"
            )
            conn.commit()

    def get_user(self, user_id: str) -> User | None:
        """Retrieve a user by ID."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, subject, email, name, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return self._user(row) if row else None

    def get_user_by_subject(self, subject: str) -> User | None:
        """Retrieve a user by identity subject."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, subject, email, name, created_at FROM users WHERE subject = ?",
                (subject,),
            ).fetchone()
        return self._user(row) if row else None

    def put_user(self, user: User) -> None:
        """Store a user, overwriting if exists."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO users (id, subject, email, name, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user.id, user.subject, user.email, user.name, user.created_at),
            )
            conn.commit()

    def put(self, question: Question) -> None:
        """Store a question, overwriting if exists."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO questions (id, owner_id, text, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    question.id,
                    question.owner_id,
                    question.text,
                    question.created_at,
                    question.updated_at,
                ),
            )
            conn.commit()

    def get(self, question_id: str) -> Question | None:
        """Retrieve a question by ID."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, owner_id, text, created_at, updated_at FROM questions WHERE id = ?",
                (question_id,),
            ).fetchone()
        return self._question(row) if row else None

    def list_by_owner(
        self, owner_id: str, num_items: int, cursor: str | None = None
    ) -> QuestionPage:
        """Page through an owner's questions, newest first.

        Uses keyset pagination on (created_at, id), so the cursor stays valid
        when new questions are added.
        """
        if num_items < 1:
            raise ValueError("num_items must be >= 1")

        query = "SELECT id, owner_id, text, created_at, updated_at FROM questions WHERE owner_id = ?"
        params: list = [owner_id]
        if cursor:
            created_at, question_id = decode_cursor(cursor)
            query += " AND (created_at < ? OR (created_at = ? AND id < ?))"
            params.extend([created_at, created_at, question_id])
        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        # Fetch one extra row to learn whether another page exists
        params.append(num_items + 1)

        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(query, params).fetchall()

        questions = [self._question(row) for row in rows[:num_items]]
        is_done = len(rows) <= num_items
        return QuestionPage(
            page=questions,
            is_done=is_done,
            continue_cursor="" if is_done else encode_cursor(questions[-1]),
        )

    def count_questions(self) -> int:
        """Count the total number of questions in the store."""
        with sqlite3.connect(self.db_path) as conn:
            count = conn.execute("SELECT COUNT(id) FROM questions").fetchone()
            return count[0] if count else 0

    @staticmethod
    def _user(row: tuple) -> User:
        return User(id=row[0], subject=row[1], email=row[2], name=row[3], created_at=row[4])

    @staticmethod
    def _question(row: tuple) -> Question:
        return Question(
            id=row[0],
            owner_id=row[1],
            text=row[2],
            created_at=row[3],
            updated_at=row[4],
        )
