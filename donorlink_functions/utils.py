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

import logging

import httpx

from donorlink_functions.constants import API_KEY_HEADER, FIELD_MASK_HEADER, PLACE_PATH
from donorlink_functions.data_models.config import DEFAULT_PLACES_BASE_URL
from donorlink_functions.exceptions import APIKeyValidationError, InvalidAPIKeyError

# A stable, well-known place looked up to check the API key.
VALIDATION_PLACE_ID = "ChIJj61dQgK6j4AR4GeTYWZsKWw"


async def validate_api_key(
    api_key: str, base_url: str = DEFAULT_PLACES_BASE_URL
) -> bool:
    """
    Validates the Places API key by making a simple API call.

    Args:
        api_key: The Places API key to validate.
        base_url: Base URL of the Places API.

    Returns:
        True if the API key is valid.

    Raises:
        InvalidAPIKeyError: If the API key is invalid (4xx error).
        APIKeyValidationError: For other network-related validation errors.
    """
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(
                f"{base_url.rstrip('/')}{PLACE_PATH.format(place_id=VALIDATION_PLACE_ID)}",
                headers={API_KEY_HEADER: api_key, FIELD_MASK_HEADER: "id"},
            )
            if 400 <= response.status_code < 500:
                raise InvalidAPIKeyError(
                    f"API key is invalid or has expired. Status: {response.status_code}"
                )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise APIKeyValidationError(
                f"Failed to validate API key due to a server error: {e}"
            )
        except httpx.RequestError as e:
            raise APIKeyValidationError(
                f"Failed to validate API key due to a network error: {e}"
            )
    logging.info("Places API key validation successful.")
    return True
