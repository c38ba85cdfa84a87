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
Clients module for the Google Places API (New).
Provides an async client for the autocomplete and place detail endpoints.
"""

import logging

import httpx

from donorlink_functions.constants import (
    API_KEY_HEADER,
    AUTOCOMPLETE_PATH,
    FIELD_MASK_HEADER,
    PLACE_PATH,
)
from donorlink_functions.data_models.config import (
    DEFAULT_PLACES_BASE_URL,
    PlacesConfig,
)
from donorlink_functions.data_models.places import (
    AutocompleteRequest,
    AutocompleteResponse,
    Place,
)
from donorlink_functions.exceptions import PlacesApiError

logger = logging.getLogger(__name__)


class PlacesClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_PLACES_BASE_URL,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the PlacesClient.

        Args:
            api_key: Places API key sent with every request
            base_url: Base URL of the Places API
            timeout: Request timeout in seconds, httpx default when None
            http_client: Existing AsyncClient to reuse. The caller keeps
                ownership and must close it.
        """
        if not api_key:
            raise ValueError("Must specify api_key")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        if http_client is None:
            client_kwargs = {"timeout": timeout} if timeout is not None else {}
            http_client = httpx.AsyncClient(**client_kwargs)
        self.http = http_client

    async def __aenter__(self) -> "PlacesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http.aclose()

    def _headers(self, field_mask: str | None = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: self.api_key,
        }
        if field_mask:
            headers[FIELD_MASK_HEADER] = field_mask
        return headers

    async def autocomplete(self, request: AutocompleteRequest) -> AutocompleteResponse:
        """POST an autocomplete request and parse the suggestions."""
        response = await self.http.post(
            f"{self.base_url}{AUTOCOMPLETE_PATH}",
            json=request.model_dump(by_alias=True, exclude_none=True),
            headers=self._headers(),
        )
        _raise_for_status(response)
        return AutocompleteResponse.model_validate(response.json())

    async def fetch_place(self, place_id: str, field_mask: str) -> Place:
        """GET one place, limited to the fields named in `field_mask`."""
        response = await self.http.get(
            f"{self.base_url}{PLACE_PATH.format(place_id=place_id)}",
            headers=self._headers(field_mask),
        )
        _raise_for_status(response)
        return Place.model_validate(response.json())


def _raise_for_status(response: httpx.Response) -> None:
    """Raise PlacesApiError with the upstream error message for non-2xx responses."""
    if response.is_success:
        return

    upstream_message = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        upstream_message = body["error"].get("message") or None

    logger.error(
        "Places API returned %s for %s: %s",
        response.status_code,
        response.request.url,
        upstream_message or response.text,
    )
    raise PlacesApiError(
        f"Request failed with status code {response.status_code}",
        status_code=response.status_code,
        upstream_message=upstream_message,
    )


def create_places_client(
    config: PlacesConfig, http_client: httpx.AsyncClient | None = None
) -> PlacesClient:
    """
    Factory function to create a PlacesClient from configuration.

    Raises:
        ValueError: If the configuration has no API key
    """
    return PlacesClient(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout_seconds,
        http_client=http_client,
    )
