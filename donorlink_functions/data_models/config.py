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
Pydantic models for configuring the callable handlers.
"""

from pydantic import BaseModel, Field, field_validator

DEFAULT_PLACES_BASE_URL = "https://places.googleapis.com/v1"


class PlacesConfig(BaseModel):
    """Configuration for the Google Places API client."""

    api_key: str | None = Field(
        default=None,
        description="API key for the Places API (X-Goog-Api-Key header)"
    )
    base_url: str = Field(
        default=DEFAULT_PLACES_BASE_URL,
        description="Base URL of the Places API"
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="HTTP timeout in seconds (httpx default when unset)"
    )

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat whitespace-only keys as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
