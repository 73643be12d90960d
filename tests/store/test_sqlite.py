"""Tests for the SQLite document store."""

import pytest

from store.base import (
    ACCOUNTS,
    TRANSACTIONS,
    WORKSPACES,
    SubscriptionError,
    WriteRejectedError,
)


class TestDocuments:
    """Tests for create, get, update, delete and list."""

    def test_create_and_get(self, store):
        """Test a created document reads back with store fields."""
        doc = store.create("ws_1", ACCOUNTS, {"name": "Wallet", "type": "cash"})

        found = store.get("ws_1", ACCOUNTS, doc["id"])

        assert found["name"] == "Wallet"
        assert found["id"] == doc["id"]
        assert set(found["created_at"]) == {"seconds", "nanoseconds"}
        assert found["created_at"] == found["updated_at"]

    def test_reserved_fields_ignored(self, store):
        """Test callers cannot set id or timestamps through data."""
        doc = store.create(
            "ws_1", ACCOUNTS, {"id": "mine", "name": "Wallet", "created_at": "yesterday"}
        )

        assert doc["id"] != "mine"
        assert isinstance(doc["created_at"], dict)

    def test_generated_ids(self, store):
        """Test ids carry a kind prefix, and workspaces the owner."""
        txn = store.create("ws_1", TRANSACTIONS, {"amount": "1"})
        workspace = store.create(None, WORKSPACES, {"user_id": "user_9", "name": "W"})

        assert txn["id"].startswith("txn_")
        assert workspace["id"].startswith("user_9_")

    def test_explicit_id_conflict(self, store):
        """Test creating an existing id is rejected."""
        store.create("ws_1", ACCOUNTS, {"name": "A"}, doc_id="acc_fixed")

        with pytest.raises(WriteRejectedError):
            store.create("ws_1", ACCOUNTS, {"name": "B"}, doc_id="acc_fixed")

    def test_if_absent_skips_existing(self, store):
        """Test if_absent leaves the existing document untouched."""
        store.create("ws_1", ACCOUNTS, {"name": "A"}, doc_id="acc_fixed")

        result = store.create(
            "ws_1", ACCOUNTS, {"name": "B"}, doc_id="acc_fixed", if_absent=True
        )

        assert result is None
        assert store.get("ws_1", ACCOUNTS, "acc_fixed")["name"] == "A"

    def test_list_in_creation_order_and_scoped(self, store):
        """Test listing returns one workspace's documents in creation order."""
        store.create("ws_1", ACCOUNTS, {"name": "B"})
        store.create("ws_2", ACCOUNTS, {"name": "Other"})
        store.create("ws_1", ACCOUNTS, {"name": "A"})

        assert [d["name"] for d in store.list("ws_1", ACCOUNTS)] == ["B", "A"]
        assert store.get("ws_2", ACCOUNTS, store.list("ws_1", ACCOUNTS)[0]["id"]) is None

    def test_update_merges_patch(self, store):
        """Test update changes only the patched fields."""
        doc = store.create("ws_1", ACCOUNTS, {"name": "Wallet", "type": "cash"})

        result = store.update("ws_1", ACCOUNTS, doc["id"], {"name": "Pocket"})

        found = store.get("ws_1", ACCOUNTS, doc["id"])
        assert result["name"] == "Pocket"
        assert "updated_at" in result
        assert found["name"] == "Pocket"
        assert found["type"] == "cash"

    def test_update_missing(self, store):
        """Test updating an unknown document is rejected."""
        with pytest.raises(WriteRejectedError):
            store.update("ws_1", ACCOUNTS, "acc_missing", {"name": "X"})

    def test_delete(self, store):
        """Test delete reports whether a document was removed."""
        doc = store.create("ws_1", ACCOUNTS, {"name": "Wallet"})

        assert store.delete("ws_1", ACCOUNTS, doc["id"]) is True
        assert store.delete("ws_1", ACCOUNTS, doc["id"]) is False

    def test_writes_need_workspace(self, store):
        """Test workspace-scoped kinds cannot be written without a workspace."""
        with pytest.raises(WriteRejectedError):
            store.create(None, ACCOUNTS, {"name": "Wallet"})

    def test_unknown_kind(self, store):
        """Test unknown kinds are a caller error."""
        with pytest.raises(ValueError):
            store.list("ws_1", "budgets")


class TestSubscriptions:
    """Tests for snapshot delivery."""

    def test_initial_snapshot_and_updates(self, store):
        """Test subscribers get the current set, then one per write."""
        store.create("ws_1", ACCOUNTS, {"name": "Wallet"})
        snapshots = []

        store.subscribe("ws_1", ACCOUNTS, snapshots.append)
        doc = store.create("ws_1", ACCOUNTS, {"name": "Bank"})
        store.update("ws_1", ACCOUNTS, doc["id"], {"name": "Savings"})
        store.delete("ws_1", ACCOUNTS, doc["id"])

        assert [[d["name"] for d in s] for s in snapshots] == [
            ["Wallet"],
            ["Wallet", "Bank"],
            ["Wallet", "Savings"],
            ["Wallet"],
        ]

    def test_only_matching_collection_notified(self, store):
        """Test writes to other workspaces or kinds are not delivered."""
        snapshots = []
        store.subscribe("ws_1", ACCOUNTS, snapshots.append)

        store.create("ws_2", ACCOUNTS, {"name": "Other"})
        store.create("ws_1", TRANSACTIONS, {"amount": "1"})

        assert snapshots == [[]]

    def test_unsubscribe(self, store):
        """Test no snapshots arrive after unsubscribing, and it can be repeated."""
        snapshots = []
        unsubscribe = store.subscribe("ws_1", ACCOUNTS, snapshots.append)

        unsubscribe()
        unsubscribe()
        store.create("ws_1", ACCOUNTS, {"name": "Wallet"})

        assert snapshots == [[]]

    def test_skipped_insert_does_not_notify(self, store):
        """Test an if_absent no-op produces no snapshot."""
        store.create("ws_1", ACCOUNTS, {"name": "A"}, doc_id="acc_fixed")
        snapshots = []
        store.subscribe("ws_1", ACCOUNTS, snapshots.append)

        store.create("ws_1", ACCOUNTS, {"name": "B"}, doc_id="acc_fixed", if_absent=True)

        assert len(snapshots) == 1

    def test_listener_failure_does_not_fail_write(self, store):
        """Test a raising listener is logged and the write still succeeds."""

        def broken(documents):
            if documents:
                raise RuntimeError("render failed")

        store.subscribe("ws_1", ACCOUNTS, broken)

        doc = store.create("ws_1", ACCOUNTS, {"name": "Wallet"})

        assert store.get("ws_1", ACCOUNTS, doc["id"]) is not None

    def test_load_failure_terminates_subscription(self, store, test_db):
        """Test a failing load reports a SubscriptionError and stops delivery."""
        snapshots, errors = [], []
        store.subscribe("ws_1", ACCOUNTS, snapshots.append, errors.append)

        test_db.execute("ALTER TABLE documents RENAME TO documents_old")
        store._notify("ws_1", ACCOUNTS)
        test_db.execute("ALTER TABLE documents_old RENAME TO documents")
        store.create("ws_1", ACCOUNTS, {"name": "Wallet"})

        assert snapshots == [[]]
        assert len(errors) == 1
        assert isinstance(errors[0], SubscriptionError)
