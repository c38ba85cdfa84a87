# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Unit tests for FirestoreAccountStore.

The Firestore AsyncClient is replaced by mocks so these tests check which
documents, queries and auth calls the store issues without touching a
real project.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, Mock, call, patch

import pytest
from firebase_admin import auth
from google.cloud import firestore

from donorlink_functions.data_models.enums import DeletionStep
from donorlink_functions.stores import FirestoreAccountStore


@pytest.fixture
def mock_db():
    """A Firestore client whose document and query methods are awaitable."""
    db = MagicMock()
    documents = {}

    def document(doc_id):
        if doc_id not in documents:
            doc = MagicMock(name=f"doc:{doc_id}")
            doc.id = doc_id
            doc.get = AsyncMock()
            doc.update = AsyncMock()
            doc.delete = AsyncMock()
            documents[doc_id] = doc
        return documents[doc_id]

    db.collection.return_value.document.side_effect = document
    db.documents = documents
    return db


def _snapshot(exists=True, data=None):
    snapshot = Mock()
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    snapshot.reference.delete = AsyncMock()
    return snapshot


@pytest.mark.asyncio
class TestFirestoreAccountStore:
    async def test_mark_profile_for_deletion(self, mock_db):
        store = FirestoreAccountStore(mock_db)
        scheduled = datetime(2026, 4, 1, tzinfo=timezone.utc)

        await store.mark_profile_for_deletion("uid1", scheduled)

        mock_db.collection.assert_called_with("users")
        mock_db.documents["uid1"].update.assert_awaited_once_with(
            {
                "markedForDeletion": True,
                "deletionScheduledAt": scheduled,
                "updatedAt": firestore.SERVER_TIMESTAMP,
            }
        )

    async def test_record_step_appends_to_marker(self, mock_db):
        store = FirestoreAccountStore(mock_db)

        await store.record_step("uid1", DeletionStep.DELETE_REQUESTS)

        update = mock_db.documents["uid1"].update.await_args.args[0]
        marker = update["deletionCompletedSteps"]
        assert isinstance(marker, firestore.ArrayUnion)
        assert marker.values == ["delete_requests"]

    async def test_delete_donor_records(self, mock_db):
        store = FirestoreAccountStore(mock_db)

        await store.delete_donor_records("uid1")

        mock_db.collection.assert_called_with("donors")
        assert set(mock_db.documents) == {"uid1_daytime", "uid1_nighttime"}
        for doc in mock_db.documents.values():
            doc.delete.assert_awaited_once_with()

    async def test_delete_provider_record_when_present(self, mock_db):
        store = FirestoreAccountStore(mock_db)
        snapshot = _snapshot(exists=True)
        mock_db.collection.return_value.document("uid1").get.return_value = snapshot

        assert await store.delete_provider_record("uid1") is True

        mock_db.collection.assert_called_with("healthcare_providers")
        snapshot.reference.delete.assert_awaited_once_with()

    async def test_delete_provider_record_when_absent(self, mock_db):
        store = FirestoreAccountStore(mock_db)
        snapshot = _snapshot(exists=False)
        mock_db.collection.return_value.document("uid1").get.return_value = snapshot

        assert await store.delete_provider_record("uid1") is False

        snapshot.reference.delete.assert_not_awaited()

    async def test_delete_requests_by_requester(self, mock_db):
        store = FirestoreAccountStore(mock_db)
        matches = [_snapshot(), _snapshot(), _snapshot()]
        query = mock_db.collection.return_value.where.return_value
        query.get = AsyncMock(return_value=matches)

        assert await store.delete_requests_by_requester("uid1") == 3

        mock_db.collection.assert_called_with("blood_requests")
        field_filter = mock_db.collection.return_value.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "requesterId"
        assert field_filter.op_string == "=="
        assert field_filter.value == "uid1"
        for snapshot in matches:
            snapshot.reference.delete.assert_awaited_once_with()

    async def test_delete_requests_with_no_matches(self, mock_db):
        store = FirestoreAccountStore(mock_db)
        query = mock_db.collection.return_value.where.return_value
        query.get = AsyncMock(return_value=[])

        assert await store.delete_requests_by_requester("uid1") == 0

    async def test_delete_identity(self, mock_db):
        app = Mock()
        store = FirestoreAccountStore(mock_db, app)

        with patch("donorlink_functions.stores.auth.delete_user") as delete_user:
            assert await store.delete_identity("uid1") is True

        delete_user.assert_called_once_with("uid1", app=app)

    async def test_delete_identity_already_gone(self, mock_db):
        store = FirestoreAccountStore(mock_db)

        with patch(
            "donorlink_functions.stores.auth.delete_user",
            side_effect=auth.UserNotFoundError("No user record found"),
        ):
            assert await store.delete_identity("uid1") is False

    async def test_delete_identity_other_errors_propagate(self, mock_db):
        store = FirestoreAccountStore(mock_db)

        with patch(
            "donorlink_functions.stores.auth.delete_user",
            side_effect=RuntimeError("quota exceeded"),
        ):
            with pytest.raises(RuntimeError, match="quota exceeded"):
                await store.delete_identity("uid1")


class TestFromDefaultApp:
    def test_initializes_app_once(self):
        with patch("donorlink_functions.stores.firebase_admin") as admin, patch(
            "donorlink_functions.stores.firestore_async"
        ) as firestore_async:
            admin.get_app.side_effect = ValueError("no app")
            store = FirestoreAccountStore.from_default_app()

        admin.initialize_app.assert_called_once_with()
        firestore_async.client.assert_called_once_with(admin.initialize_app.return_value)
        assert store.app is admin.initialize_app.return_value
        assert store.db is firestore_async.client.return_value

    def test_reuses_existing_app(self):
        with patch("donorlink_functions.stores.firebase_admin") as admin, patch(
            "donorlink_functions.stores.firestore_async"
        ):
            FirestoreAccountStore.from_default_app()

        admin.initialize_app.assert_not_called()
        assert admin.get_app.call_args == call()
