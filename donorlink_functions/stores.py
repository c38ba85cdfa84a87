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
Firestore and Firebase Auth access for the account deletion workflow.
"""

import asyncio
import logging
from datetime import datetime

import firebase_admin
from firebase_admin import auth, firestore_async
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from donorlink_functions.constants import (
    DONOR_ROLE_SUFFIXES,
    DONORS_COLLECTION,
    PROVIDERS_COLLECTION,
    REQUESTER_FIELD,
    REQUESTS_COLLECTION,
    USERS_COLLECTION,
)
from donorlink_functions.data_models.enums import DeletionStep

logger = logging.getLogger(__name__)

COMPLETED_STEPS_FIELD = "deletionCompletedSteps"


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app()


class FirestoreAccountStore:
    """Every user-linked record the deletion workflow touches.

    Each method is safe to call again after it has succeeded once.
    """

    def __init__(
        self,
        db: firestore.AsyncClient,
        app: firebase_admin.App | None = None,
    ) -> None:
        self.db = db
        self.app = app

    @classmethod
    def from_default_app(cls) -> "FirestoreAccountStore":
        app = get_firebase_app()
        return cls(firestore_async.client(app), app)

    def _profile(self, user_id: str) -> firestore.AsyncDocumentReference:
        return self.db.collection(USERS_COLLECTION).document(user_id)

    async def mark_profile_for_deletion(
        self, user_id: str, scheduled_at: datetime
    ) -> None:
        await self._profile(user_id).update(
            {
                "markedForDeletion": True,
                "deletionScheduledAt": scheduled_at,
                "updatedAt": firestore.SERVER_TIMESTAMP,
            }
        )

    async def record_step(self, user_id: str, step: DeletionStep) -> None:
        await self._profile(user_id).update(
            {COMPLETED_STEPS_FIELD: firestore.ArrayUnion([step.value])}
        )

    async def delete_donor_records(self, user_id: str) -> None:
        donors = self.db.collection(DONORS_COLLECTION)
        await asyncio.gather(
            *[
                donors.document(f"{user_id}_{suffix}").delete()
                for suffix in DONOR_ROLE_SUFFIXES
            ]
        )

    async def delete_provider_record(self, user_id: str) -> bool:
        """Delete the provider record if there is one. Returns whether it existed."""
        snapshot = await self.db.collection(PROVIDERS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            return False
        await snapshot.reference.delete()
        return True

    async def delete_requests_by_requester(self, user_id: str) -> int:
        """Delete every request the user created. Returns how many were deleted."""
        query = self.db.collection(REQUESTS_COLLECTION).where(
            filter=FieldFilter(REQUESTER_FIELD, "==", user_id)
        )
        snapshots = await query.get()
        await asyncio.gather(*[snapshot.reference.delete() for snapshot in snapshots])
        return len(snapshots)

    async def delete_identity(self, user_id: str) -> bool:
        """Delete the auth user. Returns False if it was already gone."""
        try:
            await asyncio.to_thread(auth.delete_user, user_id, app=self.app)
        except auth.UserNotFoundError:
            logger.info("Auth user %s already deleted", user_id)
            return False
        return True
