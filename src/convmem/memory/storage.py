"""SQLite storage backend for conversation memory."""

import json
import logging
import sqlite3
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from convmem.errors import StoreTimeout, StoreUnavailable
from convmem.llm.client import Message
from convmem.memory.schema import MessageRecord
from convmem.memory.store import check_conversation_id

logger = logging.getLogger(__name__)


class SQLiteMessageStore:
    """SQLite-based message store.

    Every conversation is a set of rows in a single ``messages`` table,
    ordered by an autoincrement sequence number. Appends run inside an
    immediate transaction, so batches written concurrently (from threads or
    other processes) never interleave.
    """

    def __init__(self, db_path: str | Path, timeout: float = 5.0):
        """Initialize storage with database path.

        Args:
            db_path: Path to SQLite database file
            timeout: Seconds to wait for a locked database before giving up
        """
        self.db_path = Path(db_path).expanduser()
        self.timeout = timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_db()
        logger.info("Opened message store at %s", self.db_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, translating backend failures to store errors."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn
        except sqlite3.OperationalError as e:
            text = str(e).lower()
            if "locked" in text or "busy" in text:
                raise StoreTimeout(f"Database {self.db_path} is busy: {e}") from e
            raise StoreUnavailable(f"Database {self.db_path} failed: {e}") from e
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Database {self.db_path} failed: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def _initialize_db(self) -> None:
        """Create tables and indexes if they don't exist."""
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS messages (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    conversation_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    content TEXT NOT NULL,
                    tool_calls TEXT,
                    tool_call_id TEXT,
                    name TEXT,
                    attachments TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
            """)

            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_messages_conversation "
                "ON messages(conversation_id, seq)"
            )

    def append(self, conversation_id: str, messages: Sequence[Message]) -> list[MessageRecord]:
        """Append messages to a conversation in order.

        Args:
            conversation_id: Conversation identifier
            messages: Messages to append, oldest first

        Returns:
            Stored records with their assigned sequence numbers
        """
        check_conversation_id(conversation_id)
        if not messages:
            return []

        records = []
        with self._connect() as conn:
            # Take the write lock up front so the whole batch is contiguous
            conn.execute("BEGIN IMMEDIATE")
            for message in messages:
                draft = MessageRecord.from_message(conversation_id, 0, message)
                cursor = conn.execute(
                    """
                    INSERT INTO messages
                    (conversation_id, role, content, tool_calls, tool_call_id, name,
                     attachments, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                    (
                        conversation_id,
                        draft.role.value,
                        draft.content,
                        draft.tool_calls,
                        draft.tool_call_id,
                        draft.name,
                        json.dumps(draft.attachments),
                        draft.created_at.isoformat(),
                    ),
                )
                seq = cursor.lastrowid
                assert seq is not None
                records.append(draft.model_copy(update={"seq": seq}))

        logger.debug("Appended %d message(s) to %s", len(records), conversation_id)
        return records

    def get_all(self, conversation_id: str) -> list[MessageRecord]:
        """Load the full log of a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Records in chronological order
        """
        check_conversation_id(conversation_id)
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM messages WHERE conversation_id = ? ORDER BY seq ASC",
                (conversation_id,),
            ).fetchall()

        return [self._row_to_record(row) for row in rows]

    def delete(self, conversation_id: str, seqs: Iterable[int]) -> int:
        check_conversation_id(conversation_id)
        params = [(conversation_id, seq) for seq in set(seqs)]
        if not params:
            return 0

        with self._connect() as conn:
            before = conn.total_changes
            conn.executemany(
                "DELETE FROM messages WHERE conversation_id = ? AND seq = ?",
                params,
            )
            return conn.total_changes - before

    def delete_all(self, conversation_id: str) -> int:
        """Delete all messages of a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Number of messages deleted
        """
        check_conversation_id(conversation_id)
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM messages WHERE conversation_id = ?", (conversation_id,)
            )
            return cursor.rowcount

    def list_conversation_ids(self) -> set[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT DISTINCT conversation_id FROM messages").fetchall()
        return {row["conversation_id"] for row in rows}

    def count(self, conversation_id: str) -> int:
        """Get the number of messages stored for a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Message count
        """
        check_conversation_id(conversation_id)
        with self._connect() as conn:
            result = conn.execute(
                "SELECT COUNT(*) FROM messages WHERE conversation_id = ?", (conversation_id,)
            ).fetchone()
        return int(result[0])

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> MessageRecord:
        return MessageRecord(
            conversation_id=row["conversation_id"],
            seq=row["seq"],
            role=row["role"],
            content=row["content"],
            tool_calls=row["tool_calls"],
            tool_call_id=row["tool_call_id"],
            name=row["name"],
            attachments=json.loads(row["attachments"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
