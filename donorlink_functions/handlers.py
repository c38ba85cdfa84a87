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
Callable handlers.

Each handler validates the raw callable payload, checks its preconditions
and delegates to the matching service. Dependencies such as the API key
source and the account store are supplied at construction.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from donorlink_functions.clients import PlacesClient
from donorlink_functions.config import ApiKeySource
from donorlink_functions.data_models.account import DeletionRequest
from donorlink_functions.data_models.config import PlacesConfig
from donorlink_functions.exceptions import (
    FailedPreconditionError,
    InternalError,
    UnauthenticatedError,
)
from donorlink_functions.services import (
    delete_account,
    get_place_details,
    search_places,
    utcnow,
    validate_place_detail_request,
    validate_search_request,
)
from donorlink_functions.stores import FirestoreAccountStore

logger = logging.getLogger(__name__)


class _PlacesHandler:
    def __init__(
        self,
        api_key_source: ApiKeySource,
        config: PlacesConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key_source = api_key_source
        self.config = config or PlacesConfig()
        self.http_client = http_client

    def _create_client(self) -> PlacesClient:
        api_key = self.api_key_source.get()
        if not api_key:
            raise FailedPreconditionError("Google Places API key is not configured.")
        return PlacesClient(
            api_key=api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            http_client=self.http_client,
        )


class PlaceSearchHandler(_PlacesHandler):
    async def handle(self, data: dict[str, Any] | None) -> dict[str, Any]:
        request = validate_search_request(data)
        async with self._create_client() as client:
            response = await search_places(client, request)
        return response.model_dump(by_alias=True)


class PlaceDetailHandler(_PlacesHandler):
    async def handle(self, data: dict[str, Any] | None) -> dict[str, Any]:
        request = validate_place_detail_request(data)
        async with self._create_client() as client:
            result = await get_place_details(client, request)
        return result.model_dump(by_alias=True)


class AccountDeletionHandler:
    def __init__(
        self,
        store_factory: Callable[[], FirestoreAccountStore] = (
            FirestoreAccountStore.from_default_app
        ),
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store_factory = store_factory
        self.now = now

    async def handle(self, caller_uid: str | None) -> dict[str, Any]:
        """Deletes the account of the verified caller.

        Args:
            caller_uid: The uid from the verified auth context. Payload fields
                are never consulted.
        """
        if not caller_uid:
            raise UnauthenticatedError(
                "User must be authenticated to delete their account."
            )

        try:
            store = self.store_factory()
        except Exception as e:  # noqa: BLE001
            logger.exception("Could not open the account store")
            raise InternalError(f"Failed to delete account: {e}") from e

        response = await delete_account(
            store, DeletionRequest(user_id=caller_uid), now=self.now
        )
        return response.model_dump()
