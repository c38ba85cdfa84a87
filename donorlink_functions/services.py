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

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pydantic import ValidationError

from donorlink_functions.clients import PlacesClient
from donorlink_functions.constants import (
    DELETION_GRACE_PERIOD,
    DELETION_MESSAGE,
    DETAIL_FIELD_MASK,
    ENRICHMENT_FIELD_MASK,
    PRIMARY_TYPES_BY_LOCATION,
)
from donorlink_functions.data_models.account import DeletionRequest, DeletionResponse
from donorlink_functions.data_models.enums import DeletionStep, LocationType
from donorlink_functions.data_models.places import (
    AutocompleteRequest,
    Enriched,
    Enrichment,
    PlaceDetailRequest,
    PlaceDetailResult,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    Suggestion,
    Unenriched,
)
from donorlink_functions.exceptions import (
    CallableError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    PlacesApiError,
)
from donorlink_functions.stores import FirestoreAccountStore

logger = logging.getLogger(__name__)


def validate_search_request(data: dict | None) -> SearchRequest:
    """Parses the callable payload, rejecting a missing or non-string input."""
    try:
        return SearchRequest.model_validate(data or {})
    except ValidationError:
        raise InvalidArgumentError(
            "The function must be called with a valid input string."
        ) from None


def validate_place_detail_request(data: dict | None) -> PlaceDetailRequest:
    try:
        return PlaceDetailRequest.model_validate(data or {})
    except ValidationError:
        raise InvalidArgumentError("placeId required.") from None


def primary_types_for(location_type: str | None) -> list[str] | None:
    """Returns the primary type filter for a location type, or None if unknown."""
    try:
        return list(PRIMARY_TYPES_BY_LOCATION[LocationType(location_type)])
    except ValueError:
        return None


def build_autocomplete_request(request: SearchRequest) -> AutocompleteRequest:
    region_codes = None
    if request.region_code:
        region_codes = [request.region_code.lower()]

    return AutocompleteRequest(
        input=request.query_text,
        included_region_codes=region_codes,
        included_primary_types=primary_types_for(request.location_type),
    )


async def _enrich(client: PlacesClient, suggestion: Suggestion) -> Enrichment:
    """Looks up coordinates for one suggestion. Never raises."""
    prediction = suggestion.place_prediction
    place_id = prediction.place_id if prediction else ""
    if not place_id:
        return Unenriched(reason="missing place id")

    try:
        place = await client.fetch_place(place_id, ENRICHMENT_FIELD_MASK)
    except Exception as e:  # noqa: BLE001
        logger.warning("Error fetching details for place %s: %s", place_id, e)
        return Unenriched(reason=str(e) or type(e).__name__)

    if place.location is None:
        return Unenriched(reason="no location")
    return Enriched(lat=place.location.latitude, lng=place.location.longitude)


def _places_error_message(error: Exception) -> str:
    if isinstance(error, PlacesApiError):
        return f"Google Places API error: {error.upstream_message or error}"
    return str(error) or "An unexpected error occurred"


async def search_places(client: PlacesClient, request: SearchRequest) -> SearchResponse:
    """Runs an autocomplete search and attaches coordinates to each suggestion.

    Coordinates are looked up concurrently, one detail call per suggestion.
    A failed lookup leaves that suggestion with null coordinates and
    `enriched=False`; the other suggestions are unaffected. Suggestions keep
    the order the autocomplete service returned them in.

    Args:
        client: A `PlacesClient` for the Places API.
        request: The validated search request.

    Returns:
        A `SearchResponse` with one item per upstream suggestion.

    Raises:
        InternalError: If the autocomplete call fails or returns a malformed body.

    **Example Output:**
    ```json
    {
      "suggestions": [
        {
          "placeId": "ChIJd8BlQ2BZwokRAFUEcm_qrcA",
          "description": "Main St, Springfield, IL, USA",
          "mainText": "Main St",
          "secondaryText": "Springfield, IL, USA",
          "lat": 39.80,
          "lng": -89.64,
          "enriched": true
        }
      ]
    }
    ```
    """
    autocomplete_request = build_autocomplete_request(request)
    logger.info(
        'Calling Places API with locationType=%s, input="%s", regionCode=%s',
        request.location_type,
        autocomplete_request.input,
        request.region_code,
    )

    try:
        autocomplete_response = await client.autocomplete(autocomplete_request)
    except Exception as e:  # noqa: BLE001
        logger.exception("Error in place autocomplete")
        raise InternalError(_places_error_message(e)) from e

    suggestions = autocomplete_response.suggestions
    logger.info("Places API returned %d suggestions", len(suggestions))

    enrichments = await asyncio.gather(*[_enrich(client, s) for s in suggestions])
    for suggestion, enrichment in zip(suggestions, enrichments, strict=True):
        if isinstance(enrichment, Unenriched):
            prediction = suggestion.place_prediction
            logger.debug(
                "No coordinates for suggestion %r: %s",
                prediction.place_id if prediction else "",
                enrichment.reason,
            )
    return SearchResponse(
        suggestions=[
            SearchResultItem.from_suggestion(suggestion, enrichment)
            for suggestion, enrichment in zip(suggestions, enrichments, strict=True)
        ]
    )


async def get_place_details(
    client: PlacesClient, request: PlaceDetailRequest
) -> PlaceDetailResult:
    """Fetches coordinates and the display name for one place.

    Raises:
        NotFoundError: If the place record has no location.
        InternalError: If the detail call fails.
    """
    logger.info("Fetching place details for placeId: %s", request.place_id)
    try:
        place = await client.fetch_place(request.place_id, DETAIL_FIELD_MASK)
    except Exception as e:  # noqa: BLE001
        if isinstance(e, PlacesApiError) and e.upstream_message:
            logger.error("API Response Error: %s", e.upstream_message)
        logger.error("Place Details Error: %s", e)
        raise InternalError(str(e)) from e

    if place.location is None:
        raise NotFoundError("No coordinates found for this place.")

    return PlaceDetailResult(
        lat=place.location.latitude,
        lng=place.location.longitude,
        name=place.display_name.text if place.display_name else "",
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def delete_account(
    store: FirestoreAccountStore,
    request: DeletionRequest,
    now: Callable[[], datetime] = utcnow,
) -> DeletionResponse:
    """Deletes the caller's data across every store, then their auth identity.

    The steps run strictly in order and are not a transaction. The profile is
    only flagged, with hard deletion scheduled 30 days out for a separate
    retention job; donor, provider and request records are deleted now.

    Every call runs every step; each is safe to repeat, so an interrupted
    deletion is finished by calling again. Steps are recorded in the
    profile's progress marker as they commit.

    Raises:
        InternalError: If any step fails. Steps completed before the failure
            stay completed.
    """
    user_id = request.user_id
    logger.info("Starting account deletion for user: %s", user_id)

    try:
        await store.mark_profile_for_deletion(
            user_id, now() + DELETION_GRACE_PERIOD
        )
        done = [DeletionStep.MARK_PROFILE]

        steps = [
            (DeletionStep.DELETE_DONOR_RECORDS, store.delete_donor_records),
            (DeletionStep.DELETE_PROVIDER_RECORD, store.delete_provider_record),
            (DeletionStep.DELETE_REQUESTS, store.delete_requests_by_requester),
            (DeletionStep.DELETE_IDENTITY, store.delete_identity),
        ]
        for step, run_step in steps:
            result = await run_step(user_id)
            logger.info("Completed %s for %s (%s)", step.value, user_id, result)
            await store.record_step(user_id, step)
            done.append(step)
    except CallableError:
        raise
    except Exception as e:
        logger.exception("Error deleting user account %s", user_id)
        raise InternalError(f"Failed to delete account: {e}") from e

    logger.info(
        "Account deletion completed for user: %s. "
        "Data will be permanently deleted in 30 days.",
        user_id,
    )
    return DeletionResponse(success=True, message=DELETION_MESSAGE, completed_steps=done)
