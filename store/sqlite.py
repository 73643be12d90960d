"""SQLite implementation of the document store."""

import itertools
import json
import secrets
import sqlite3
import time
from typing import Dict, List, Optional, Tuple

from logger import get_logger
from models.fields import ServerTimestamp
from store.base import (
    KINDS,
    WORKSPACES,
    DocumentStore,
    ErrorCallback,
    SnapshotCallback,
    SubscriptionError,
    Unsubscribe,
    WriteRejectedError,
)

logger = get_logger("store")

_ID_PREFIXES = {
    "accounts": "acc",
    "categories": "cat",
    "transactions": "txn",
}

# Fields owned by the store; callers cannot set them through data or patches
_RESERVED_FIELDS = {"id", "created_at", "updated_at"}


class SQLiteDocumentStore(DocumentStore):
    """Document store backed by the ``documents`` table.

    Subscribers are notified synchronously, on the writer's call stack, once the
    write has been committed.

    Args:
        db_manager: Database manager instance for database operations.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager
        self._subscribers: Dict[
            Tuple[Optional[str], str], Dict[int, Tuple[SnapshotCallback, Optional[ErrorCallback]]]
        ] = {}
        self._tokens = itertools.count(1)

    def subscribe(
        self,
        workspace_id: Optional[str],
        kind: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        self._check_kind(kind)
        key = (workspace_id, kind)
        token = next(self._tokens)
        self._subscribers.setdefault(key, {})[token] = (on_snapshot, on_error)
        logger.debug(f"Subscribed #{token} to {kind} of workspace {workspace_id}")

        self._deliver(key, token)

        def unsubscribe() -> None:
            if self._subscribers.get(key, {}).pop(token, None) is not None:
                logger.debug(f"Unsubscribed #{token} from {kind}")

        return unsubscribe

    def create(
        self,
        workspace_id: Optional[str],
        kind: str,
        data: dict,
        doc_id: Optional[str] = None,
        if_absent: bool = False,
    ) -> Optional[dict]:
        self._check_scope(workspace_id, kind)
        payload = {k: v for k, v in data.items() if k not in _RESERVED_FIELDS}
        doc_id = doc_id or self._generate_id(kind, payload)
        now = json.dumps(ServerTimestamp.now().to_dict())
        verb = "INSERT OR IGNORE" if if_absent else "INSERT"

        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    f"""
                    {verb} INTO documents
                        (kind, id, workspace_id, data, created_at, updated_at, seq)
                    VALUES (?, ?, ?, ?, ?, ?,
                        (SELECT COALESCE(MAX(seq), 0) + 1 FROM documents))
                    """,
                    (kind, doc_id, workspace_id, json.dumps(payload), now, now),
                )
                conn.commit()
                inserted = cursor.rowcount > 0
        except sqlite3.IntegrityError as e:
            raise WriteRejectedError(f"{kind} document '{doc_id}' already exists") from e
        except sqlite3.Error as e:
            raise WriteRejectedError(f"Could not create {kind} document: {e}") from e

        if not inserted:
            logger.debug(f"Skipped existing {kind} document {doc_id}")
            return None

        self._notify(workspace_id, kind)
        stamp = json.loads(now)
        return {"id": doc_id, **payload, "created_at": stamp, "updated_at": stamp}

    def update(
        self, workspace_id: Optional[str], kind: str, doc_id: str, patch: dict
    ) -> dict:
        self._check_scope(workspace_id, kind)
        changes = {k: v for k, v in patch.items() if k not in _RESERVED_FIELDS}
        now = ServerTimestamp.now().to_dict()

        try:
            with self.db_manager.connect() as conn:
                row = conn.execute(
                    "SELECT data FROM documents WHERE kind = ? AND id = ? AND workspace_id IS ?",
                    (kind, doc_id, workspace_id),
                ).fetchone()
                if row is None:
                    raise WriteRejectedError(f"{kind} document '{doc_id}' not found")

                merged = {**json.loads(row[0]), **changes}
                conn.execute(
                    """
                    UPDATE documents SET data = ?, updated_at = ?
                    WHERE kind = ? AND id = ? AND workspace_id IS ?
                    """,
                    (json.dumps(merged), json.dumps(now), kind, doc_id, workspace_id),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise WriteRejectedError(f"Could not update {kind} document: {e}") from e

        self._notify(workspace_id, kind)
        return {**changes, "updated_at": now}

    def delete(self, workspace_id: Optional[str], kind: str, doc_id: str) -> bool:
        self._check_scope(workspace_id, kind)
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM documents WHERE kind = ? AND id = ? AND workspace_id IS ?",
                    (kind, doc_id, workspace_id),
                )
                conn.commit()
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            raise WriteRejectedError(f"Could not delete {kind} document: {e}") from e

        if deleted:
            self._notify(workspace_id, kind)
        return deleted

    def get(self, workspace_id: Optional[str], kind: str, doc_id: str) -> Optional[dict]:
        self._check_kind(kind)
        with self.db_manager.connect() as conn:
            row = conn.execute(
                """
                SELECT id, data, created_at, updated_at FROM documents
                WHERE kind = ? AND id = ? AND workspace_id IS ?
                """,
                (kind, doc_id, workspace_id),
            ).fetchone()

        if row:
            return self._row_to_document(row)
        return None

    def list(self, workspace_id: Optional[str], kind: str) -> List[dict]:
        self._check_kind(kind)
        with self.db_manager.connect() as conn:
            rows = conn.execute(
                """
                SELECT id, data, created_at, updated_at FROM documents
                WHERE kind = ? AND workspace_id IS ?
                ORDER BY seq
                """,
                (kind, workspace_id),
            ).fetchall()

        return [self._row_to_document(row) for row in rows]

    def _notify(self, workspace_id: Optional[str], kind: str) -> None:
        key = (workspace_id, kind)
        for token in list(self._subscribers.get(key, {})):
            self._deliver(key, token)

    def _deliver(self, key: Tuple[Optional[str], str], token: int) -> None:
        """Push the current collection to one subscriber."""
        subscriber = self._subscribers.get(key, {}).get(token)
        if subscriber is None:
            return
        on_snapshot, on_error = subscriber
        workspace_id, kind = key

        try:
            documents = self.list(workspace_id, kind)
        except sqlite3.Error as e:
            self._subscribers[key].pop(token, None)
            logger.error(f"Subscription #{token} to {kind} terminated: {e}")
            if on_error is not None:
                on_error(SubscriptionError(f"Could not load {kind}: {e}"))
            return

        try:
            on_snapshot(documents)
        except Exception:
            # The write is committed by now; listener failures are logged, not
            # raised to the writer
            logger.exception(f"Snapshot listener #{token} for {kind} failed")

    def _row_to_document(self, row: tuple) -> dict:
        document = json.loads(row[1])
        document["id"] = row[0]
        document["created_at"] = json.loads(row[2])
        document["updated_at"] = json.loads(row[3])
        return document

    def _generate_id(self, kind: str, data: dict) -> str:
        millis = int(time.time() * 1000)
        suffix = secrets.token_hex(5)[:9]
        if kind == WORKSPACES:
            return f"{data.get('user_id', 'anonymous')}_{millis}_{suffix}"
        return f"{_ID_PREFIXES[kind]}_{millis}_{suffix}"

    def _check_kind(self, kind: str) -> None:
        if kind not in KINDS:
            raise ValueError(f"Unknown document kind: {kind}")

    def _check_scope(self, workspace_id: Optional[str], kind: str) -> None:
        self._check_kind(kind)
        if kind != WORKSPACES and not workspace_id:
            raise WriteRejectedError(f"No workspace given for {kind} write")
